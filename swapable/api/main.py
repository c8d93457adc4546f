"""HTTP service exposing the pool commands.

Every command endpoint answers with the contract to sign. The service holds
no keys; the actors of a contract co-sign and announce it themselves.
"""

import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swapable import __version__
from swapable.api.endpoints import router
from swapable.constants import REVISION

HOST = os.environ.get("SWAPABLE_HOST", "0.0.0.0")
PORT = int(os.environ.get("SWAPABLE_PORT", "8000"))
DEBUG = os.environ.get("SWAPABLE_DEBUG", "false").lower() in ("true", "1", "yes")

# Posted ledger snapshots larger than this are refused
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Swapable",
    description="Automated liquidity pool contracts for digital assets",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Answer 413 when the declared content length exceeds MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Liveness, with the contract revision this service assembles."""
    return {"status": "ok", "revision": REVISION}


def run() -> None:
    """Serve the app with uvicorn.

    SWAPABLE_HOST and SWAPABLE_PORT select the bind address (0.0.0.0:8000).
    SWAPABLE_DEBUG=true turns on auto-reload.
    """
    uvicorn.run(
        "swapable.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
