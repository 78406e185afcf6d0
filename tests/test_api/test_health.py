# nosec B101


from fastapi.testclient import TestClient

from api.main import app


def test_health():
    response = TestClient(app).get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
