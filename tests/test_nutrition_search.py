from fittrack.config import settings
from fittrack.routers import nutrition_search


def test_requires_session(client):
    assert client.get("/api/nutrition-search", params={"q": "apple"}).status_code == 401


def test_requires_query_or_fdc_id(client, signup):
    signup()

    response = client.get("/api/nutrition-search")

    assert response.status_code == 400
    assert response.json()["error"] == 'Query parameter "q" or "fdcId" is required'


def test_unconfigured_api_key(client, signup, monkeypatch):
    signup()
    monkeypatch.setattr(settings, "USDA_API_KEY", None)

    response = client.get("/api/nutrition-search", params={"q": "apple"})

    assert response.status_code == 503
    assert response.json()["error"] == "Nutrition search is not configured"


def test_search_passes_upstream_payload_through(client, signup, monkeypatch):
    signup()
    seen = {}

    async def _fake_search(query):
        seen["query"] = query
        return {"foods": [{"fdcId": 1, "description": "Apple"}]}

    async def _fake_fetch(fdc_id):
        seen["fdc_id"] = fdc_id
        return {"fdcId": fdc_id, "description": "Apple, raw"}

    monkeypatch.setattr(nutrition_search, "search_foods", _fake_search)
    monkeypatch.setattr(nutrition_search, "fetch_food", _fake_fetch)

    search = client.get("/api/nutrition-search", params={"q": "apple"})
    assert search.status_code == 200
    assert search.json()["data"]["foods"][0]["description"] == "Apple"
    assert seen["query"] == "apple"

    detail = client.get("/api/nutrition-search", params={"fdcId": 171688})
    assert detail.status_code == 200
    assert detail.json()["data"]["description"] == "Apple, raw"
    assert seen["fdc_id"] == 171688
