import logging

from fastapi import FastAPI

from app.api.v1.chats import router as chats_router
from app.core.config import settings

LOG_CONTEXT_KEYS = ("session_id", "state", "store", "reason", "error")


class ContextFormatter(logging.Formatter):
    """Appends the chat context passed via `extra=` as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in LOG_CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        )
        return f"{base} | {context}" if context else base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Pasar Desa Chat", version="1.0.0")
app.include_router(chats_router, prefix="/api/v1", tags=["chats"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
