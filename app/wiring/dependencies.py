from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.catalog import CatalogPort
from app.application.ports.completion import CompletionPort
from app.application.ports.session_store import SessionStorePort
from app.application.use_cases.chat_session import ChatSessionUseCase
from app.infrastructure.catalog.memory_catalog import MemoryCatalog
from app.infrastructure.llm.mock_completion import MockCompletion
from app.infrastructure.llm.openai_completion import OpenAICompletion
from app.infrastructure.store.json_store import JsonSessionStore
from app.infrastructure.store.memory_store import MemorySessionStore


logger = logging.getLogger(__name__)


@lru_cache
def get_completion() -> CompletionPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        logger.info("Using OpenAICompletion model=%s", settings.OPENAI_MODEL_CHAT)
        return OpenAICompletion()
    logger.info("Using MockCompletion (OPENAI_API_KEY missing)")
    return MockCompletion()


@lru_cache
def get_session_store() -> SessionStorePort:
    if settings.ENV.lower() in {"dev", "local"}:
        return JsonSessionStore(data_dir=settings.SESSION_DATA_DIR)
    return MemorySessionStore()


@lru_cache
def get_catalog() -> CatalogPort:
    if settings.CATALOG_PATH:
        return MemoryCatalog.from_json_file(settings.CATALOG_PATH)
    return MemoryCatalog()


@lru_cache
def get_chat_use_case() -> ChatSessionUseCase:
    return ChatSessionUseCase(
        store=get_session_store(),
        catalog=get_catalog(),
        completion=get_completion(),
        history_window=settings.CHAT_HISTORY_WINDOW,
        price_policy=settings.ORDER_PRICE_POLICY,
        village_name=settings.VILLAGE_NAME,
    )
