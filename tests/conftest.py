from typing import Any, Dict, List, Optional

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from churn_client.client import PredictionClient


def _build_stub_app(
    prediction: Any = 1,
    status_code: int = 200,
    raw_body: Optional[str] = None,
    body: Optional[Dict[str, Any]] = None,
) -> FastAPI:
    """
    Build a stand-in prediction service that records every request it receives.
    """
    app = FastAPI(title="Churn Stub API")
    app.state.calls = []

    @app.post("/predict")
    async def predict(request: Request):
        app.state.calls.append({"headers": dict(request.headers), "json": await request.json()})
        if status_code >= 400:
            raise HTTPException(status_code=status_code, detail="model unavailable")
        if raw_body is not None:
            return PlainTextResponse(raw_body)
        return JSONResponse(content=body if body is not None else {"prediction": prediction}, status_code=status_code)

    return app


class StubService:
    def __init__(self, **kwargs: Any):
        self.app = _build_stub_app(**kwargs)
        self.http = TestClient(self.app)
        self.client = PredictionClient(base_url="http://testserver", session=self.http)

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.app.state.calls


@pytest.fixture
def stub_service():
    """
    Factory for stub services; keyword arguments shape the canned reply.
    """
    return StubService
