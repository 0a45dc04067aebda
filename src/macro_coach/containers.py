"""Dependency container wiring for the coach."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_coach.adapters.file_storage import JsonFileStorage
from macro_coach.adapters.openai_meal_client import OpenAIMealClient
from macro_coach.adapters.supabase_storage import SupabaseStorage
from macro_coach.config import Settings
from macro_coach.services.ingestion import AnswerIngestor
from macro_coach.services.meal_parser import (
    KeywordMealParser,
    LlmMealParser,
    MealParser,
)
from macro_coach.services.meals import MealLogService
from macro_coach.services.plans import PlanEngine
from macro_coach.services.profiles import ProfileService
from macro_coach.services.storage import CoachStorage


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: CoachStorage
    plan_engine: PlanEngine
    ingestor: AnswerIngestor
    profile_service: ProfileService
    meal_parser: MealParser
    meal_log_service: MealLogService
    close_resources: Callable[[], Awaitable[None]]


def build_storage(settings: Settings) -> CoachStorage:
    """Create the configured storage backend."""
    if settings.storage_backend == "file":
        return JsonFileStorage.create(settings.storage_dir)
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        return SupabaseStorage(
            create_client(settings.supabase_url, settings.supabase_service_key)
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = build_storage(resolved_settings)
    plan_engine = PlanEngine()
    ingestor = AnswerIngestor()
    profile_service = ProfileService(
        storage=storage, ingestor=ingestor, plan_engine=plan_engine
    )

    openai_client: OpenAIMealClient | None = None
    meal_parser: MealParser
    if resolved_settings.meal_parser == "keyword":
        meal_parser = KeywordMealParser()
    elif resolved_settings.meal_parser == "openai":
        if not resolved_settings.openai_api_key:
            raise ValueError("OpenAI meal parser requires an API key")
        openai_client = OpenAIMealClient.create(resolved_settings.openai_api_key)
        meal_parser = LlmMealParser(
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    else:
        raise ValueError(f"Unknown meal parser: {resolved_settings.meal_parser}")

    meal_log_service = MealLogService(storage=storage, parser=meal_parser)

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        plan_engine=plan_engine,
        ingestor=ingestor,
        profile_service=profile_service,
        meal_parser=meal_parser,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
