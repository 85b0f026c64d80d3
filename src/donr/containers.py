"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient

from donr.adapters.fcm_client import HttpxFcmClient, LoggingPushClient, PushClient
from donr.adapters.geocoding_clients import (
    HttpxGoogleGeocodingClient,
    HttpxNominatimClient,
)
from donr.adapters.supabase_center_repository import SupabaseCenterRepository
from donr.adapters.supabase_donation_repository import SupabaseDonationRepository
from donr.adapters.supabase_food_request_repository import (
    SupabaseFoodRequestRepository,
)
from donr.adapters.supabase_identity_verifier import (
    IdentityVerifier,
    SupabaseIdentityVerifier,
)
from donr.adapters.supabase_user_repository import SupabaseUserRepository
from donr.config import Settings
from donr.services.background import BackgroundTasks
from donr.services.centers import CenterService
from donr.services.donations import DonationService
from donr.services.food_requests import FoodRequestService
from donr.services.geocoding import GeocodingService
from donr.services.matching import ProximityMatcher
from donr.services.notifications import NotificationService
from donr.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_verifier: IdentityVerifier
    user_service: UserService
    geocoding_service: GeocodingService
    matcher: ProximityMatcher
    notification_service: NotificationService
    donation_service: DonationService
    food_request_service: FoodRequestService
    center_service: CenterService
    background: BackgroundTasks
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    donation_repository = SupabaseDonationRepository(supabase_client)
    user_service = UserService(user_repository)

    nominatim_client = HttpxNominatimClient.create(
        user_agent=resolved_settings.geocoder_user_agent,
        base_url=resolved_settings.nominatim_base_url,
    )
    google_client = (
        HttpxGoogleGeocodingClient.create(
            api_key=resolved_settings.google_maps_api_key,
            base_url=resolved_settings.google_geocode_url,
        )
        if resolved_settings.google_maps_api_key
        else None
    )
    geocoding_service = GeocodingService(fallback=nominatim_client, primary=google_client)

    fcm_client = (
        HttpxFcmClient.create(
            project_id=resolved_settings.fcm_project_id,
            access_token=resolved_settings.fcm_access_token,
        )
        if resolved_settings.fcm_project_id and resolved_settings.fcm_access_token
        else None
    )
    push_client: PushClient = fcm_client or LoggingPushClient()
    notification_service = NotificationService(
        user_repository=user_repository,
        push_client=push_client,
    )
    matcher = ProximityMatcher(
        user_repository=user_repository,
        donation_repository=donation_repository,
        radius_miles=resolved_settings.matching_radius_miles,
    )
    background = BackgroundTasks()
    donation_service = DonationService(
        repository=donation_repository,
        user_service=user_service,
        geocoding_service=geocoding_service,
        matcher=matcher,
        notification_service=notification_service,
        background=background,
    )
    food_request_service = FoodRequestService(
        repository=SupabaseFoodRequestRepository(supabase_client),
        user_service=user_service,
    )
    center_service = CenterService(SupabaseCenterRepository(supabase_client))

    async def close_resources() -> None:
        await background.wait()
        await nominatim_client.close()
        if google_client is not None:
            await google_client.close()
        if fcm_client is not None:
            await fcm_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_verifier=SupabaseIdentityVerifier(supabase_client),
        user_service=user_service,
        geocoding_service=geocoding_service,
        matcher=matcher,
        notification_service=notification_service,
        donation_service=donation_service,
        food_request_service=food_request_service,
        center_service=center_service,
        background=background,
        close_resources=close_resources,
    )
