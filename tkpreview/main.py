from prometheus_fastapi_instrumentator import Instrumentator

from tkpreview.core.logging import configure_logging
from tkpreview.settings import settings
from . import app as preview_app

configure_logging(settings.LOG_LEVEL)
app = preview_app
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app, include_in_schema=False)


@app.get("/health")
async def health() -> dict[str, bool]:
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run("tkpreview.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
