from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from driveless.config import Settings
from driveless.errors import ApiError, NetworkError, ValidationError
from driveless.main import create_app
from driveless.persistence.kv import InMemoryKeyValueStore
from driveless.services.export.exporter import NavigationExporter
from driveless.services.history.auto_save import AutoSaver
from driveless.services.history.store import RouteStore
from driveless.services.routing.models import EngineLeg, EngineRoute, LatLng
from driveless.services.routing.service import RoutePlanner


class DummyDirections:
    def __init__(self):
        self.error = None
        self.healthy = True

    def compute_route(self, request):
        if self.error is not None:
            raise self.error
        return EngineRoute(
            legs=(
                EngineLeg("A St", "B St", LatLng(29.76, -95.36), LatLng(29.77, -95.37), 1000, 120),
                EngineLeg("B St", "C St", LatLng(29.77, -95.37), LatLng(29.78, -95.38), 2000, 180),
            ),
            polyline="_p~iF~ps|U_ulLnnqC",
            waypoint_order=(0,),
        )

    def check_health(self):
        return self.healthy


class RecordingLauncher:
    def can_launch(self, url):
        return False

    def launch(self, url):
        return True


@pytest.fixture
def directions() -> DummyDirections:
    return DummyDirections()


@pytest.fixture
def api_client(tmp_path: Path, directions: DummyDirections) -> TestClient:
    store = RouteStore(InMemoryKeyValueStore())
    app = create_app(
        Settings(data_root=tmp_path, google_api_key="test-key"),
        planner=RoutePlanner(directions, AutoSaver(store)),
        store=store,
        exporter=NavigationExporter(RecordingLauncher(), platform="ios"),
    )
    return TestClient(app)


PLAN_PAYLOAD = {
    "origin": "A St",
    "destination": "C St",
    "stops": ["B St"],
    "origin_display_name": "Home",
    "destination_display_name": "Office",
    "stop_display_names": ["Coffee"],
}


def _plan(client: TestClient, **overrides):
    return client.post("/api/routes/plan", json={**PLAN_PAYLOAD, **overrides})


def test_root_and_health(api_client: TestClient) -> None:
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}
    assert api_client.get("/api/health/directions").json() == {"service": "directions", "healthy": True}


def test_plan_route_without_saving(api_client: TestClient) -> None:
    response = _plan(api_client)

    assert response.status_code == 200
    body = response.json()
    assert body["saved_route_id"] is None
    assert body["route"]["total_distance"] == "1.9 mi"
    assert body["route"]["total_time"] == "5m"
    assert [stop["display_name"] for stop in body["route"]["stops"]] == ["Home", "Coffee", "Office"]
    assert api_client.get("/api/routes/history").json() == []


def test_plan_and_save_deduplicates(api_client: TestClient) -> None:
    first = _plan(api_client, save=True).json()
    second = _plan(api_client, save=True).json()

    assert first["saved_route_id"] is not None
    assert second["saved_route_id"] is None

    history = api_client.get("/api/routes/history").json()
    assert [entry["id"] for entry in history] == [first["saved_route_id"]]
    assert history[0]["name"] == "Home + 1 stops → Office"
    assert history[0]["request"]["origin"] == "A St"


@pytest.mark.parametrize(
    "error, expected_status",
    [
        (ValidationError("Maximum 25 waypoints allowed"), 422),
        (ApiError("API Error: ZERO_RESULTS", status="ZERO_RESULTS"), 502),
        (NetworkError("Request timed out"), 503),
    ],
)
def test_plan_errors_map_to_http_status(
    api_client: TestClient, directions: DummyDirections, error, expected_status
) -> None:
    directions.error = error

    response = _plan(api_client, save=True)

    assert response.status_code == expected_status
    assert response.json()["detail"] == error.message
    assert api_client.get("/api/routes/history").json() == []


def test_plan_unavailable_without_api_key(tmp_path: Path) -> None:
    app = create_app(
        Settings(data_root=tmp_path, google_api_key=None),
        store=RouteStore(InMemoryKeyValueStore()),
        exporter=NavigationExporter(RecordingLauncher(), platform="android"),
    )
    client = TestClient(app)

    assert _plan(client).status_code == 503


def test_update_and_delete_saved_route(api_client: TestClient) -> None:
    route_id = _plan(api_client, save=True).json()["saved_route_id"]

    response = api_client.patch(
        f"/api/routes/history/{route_id}", json={"name": "Commute", "is_favorite": True}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Commute"
    assert response.json()["is_favorite"] is True

    favorites = api_client.get("/api/routes/history", params={"favorites_only": True}).json()
    assert [entry["id"] for entry in favorites] == [route_id]
    assert api_client.get(f"/api/routes/history/{route_id}").json()["name"] == "Commute"

    assert api_client.patch(f"/api/routes/history/{route_id}", json={"name": ""}).status_code == 422

    assert api_client.delete(f"/api/routes/history/{route_id}").status_code == 204
    assert api_client.delete(f"/api/routes/history/{route_id}").status_code == 404
    assert api_client.get(f"/api/routes/history/{route_id}").status_code == 404


def test_navigation_targets_follow_platform(api_client: TestClient) -> None:
    keys = [target["key"] for target in api_client.get("/api/navigation/targets").json()]

    assert keys == ["google_maps", "waze", "apple_maps"]


def test_navigation_links_for_saved_route(api_client: TestClient) -> None:
    route_id = _plan(api_client, save=True).json()["saved_route_id"]

    waze = api_client.get(f"/api/routes/history/{route_id}/navigation/waze").json()
    assert waze["urls"] == [
        "https://waze.com/ul?ll=29.77,-95.37&navigate=yes",
        "waze://?ll=29.77,-95.37&navigate=yes",
    ]
    assert waze["shareable_url"] == (
        "https://www.google.com/maps/dir/29.76,-95.36/29.77,-95.37/29.78,-95.38"
    )

    assert api_client.get(f"/api/routes/history/{route_id}/navigation/mapquest").status_code == 404
    assert api_client.get("/api/routes/history/missing/navigation/waze").status_code == 404


class InterleavingBackend(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.interleave = None

    def compare_and_set(self, key, expected, value):
        if self.interleave is not None:
            action, self.interleave = self.interleave, None
            action()
        return super().compare_and_set(key, expected, value)


def test_patch_keeps_favorite_toggled_during_rename(tmp_path: Path, directions: DummyDirections) -> None:
    backend = InterleavingBackend()
    store = RouteStore(backend)
    app = create_app(
        Settings(data_root=tmp_path, google_api_key="test-key"),
        planner=RoutePlanner(directions, AutoSaver(store)),
        store=store,
        exporter=NavigationExporter(RecordingLauncher(), platform="ios"),
    )
    client = TestClient(app)
    route_id = _plan(client, save=True).json()["saved_route_id"]

    backend.interleave = lambda: store.set_favorite(route_id, True)
    response = client.patch(f"/api/routes/history/{route_id}", json={"name": "Renamed"})

    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"
    assert response.json()["is_favorite"] is True
    stored = store.get(route_id)
    assert (stored.name, stored.is_favorite) == ("Renamed", True)


def test_patch_missing_route_returns_404(api_client: TestClient) -> None:
    assert api_client.patch("/api/routes/history/missing", json={"name": "x"}).status_code == 404
    assert api_client.patch("/api/routes/history/missing", json={}).status_code == 404
