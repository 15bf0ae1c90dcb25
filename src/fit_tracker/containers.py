"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import tzinfo

from supabase import create_client

from fit_tracker.adapters.supabase_document_store import SupabaseDocumentStore
from fit_tracker.config import Settings, parse_timezone
from fit_tracker.services.catalog import CatalogService
from fit_tracker.services.meals import MealLogService
from fit_tracker.services.profiles import ProfileService
from fit_tracker.services.stats import StatsService
from fit_tracker.services.store import DocumentStore
from fit_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    timezone: tzinfo
    store: DocumentStore
    catalog_service: CatalogService
    profile_service: ProfileService
    meal_log_service: MealLogService
    tracker_service: TrackerService
    stats_service: StatsService


def build_services(settings: Settings, store: DocumentStore) -> AppContainer:
    """Build every service on top of a document store."""
    timezone = parse_timezone(settings.default_timezone)
    catalog_service = CatalogService()
    profile_service = ProfileService(store)
    meal_log_service = MealLogService(store=store, catalog=catalog_service)
    tracker_service = TrackerService(
        store=store,
        profiles=profile_service,
        meals=meal_log_service,
        tz=timezone,
    )
    return AppContainer(
        settings=settings,
        timezone=timezone,
        store=store,
        catalog_service=catalog_service,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        tracker_service=tracker_service,
        stats_service=StatsService(meal_log_service),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container backed by Supabase."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    store = SupabaseDocumentStore(
        supabase_client, table_name=resolved_settings.documents_table
    )
    return build_services(resolved_settings, store)
