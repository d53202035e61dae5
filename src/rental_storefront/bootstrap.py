from __future__ import annotations

import logging
from dataclasses import dataclass

from rental_storefront.application.ports.clock_port import Clock, SystemClock
from rental_storefront.application.ports.http_client_port import HttpClientPort
from rental_storefront.application.ports.session_persistence_port import SessionPersistencePort
from rental_storefront.application.services.admin_gate import AdminGate
from rental_storefront.application.services.catalog_store import CatalogStore
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.application.use_cases.browse_catalog import BrowseCatalogUseCase
from rental_storefront.application.use_cases.chat_with_assistant import ChatWithAssistantUseCase
from rental_storefront.application.use_cases.manage_catalog import ManageCatalogUseCase
from rental_storefront.application.use_cases.redeem_code import RedeemCodeUseCase
from rental_storefront.application.use_cases.resume_rental import ResumeRentalUseCase
from rental_storefront.application.use_cases.submit_survey import SubmitSurveyUseCase
from rental_storefront.application.use_cases.watch_movie import WatchMovieUseCase
from rental_storefront.config import Settings, settings as default_settings
from rental_storefront.infrastructure.adapters.api.assistant_adapter import ChatAdapter, SurveyAdapter
from rental_storefront.infrastructure.adapters.api.catalog_adapter import CategoriesAdapter, MoviesAdapter
from rental_storefront.infrastructure.adapters.api.payhip_adapter import PayhipValidationAdapter
from rental_storefront.infrastructure.adapters.api.rentals_adapter import RentalsAdapter
from rental_storefront.infrastructure.adapters.http.httpx_client import HttpxClient
from rental_storefront.infrastructure.adapters.http.requests_client import RequestsHttpClient
from rental_storefront.infrastructure.adapters.session.json_file_store import JsonFileSessionPersistence
from rental_storefront.infrastructure.adapters.session.memory_store import InMemorySessionPersistence
from rental_storefront.infrastructure.adapters.session.sqlite_store import SQLiteSessionPersistence

logger = logging.getLogger(__name__)


@dataclass
class Storefront:
    """Everything the front ends need, wired once by the root composition."""

    http: HttpClientPort
    session: SessionStore
    catalog: CatalogStore
    admin: AdminGate
    movies: MoviesAdapter
    redeem: RedeemCodeUseCase
    watch: WatchMovieUseCase
    resume: ResumeRentalUseCase
    browse: BrowseCatalogUseCase
    chat: ChatWithAssistantUseCase
    survey: SubmitSurveyUseCase
    manage: ManageCatalogUseCase

    def close(self) -> None:
        self.http.close()


def build_http_client(cfg: Settings) -> HttpClientPort:
    if cfg.http_backend == "requests":
        return RequestsHttpClient(cfg.api_base_url, cfg.http_timeout, admin_token=cfg.admin_password)
    return HttpxClient(cfg.api_base_url, cfg.http_timeout, admin_token=cfg.admin_password)


def build_persistence(cfg: Settings) -> SessionPersistencePort:
    if cfg.session_backend == "memory":
        return InMemorySessionPersistence()
    if cfg.session_backend == "sqlite":
        return SQLiteSessionPersistence(db_path=cfg.session_path)
    return JsonFileSessionPersistence(cfg.session_path)


def build_storefront(
    cfg: Settings | None = None,
    *,
    http: HttpClientPort | None = None,
    persistence: SessionPersistencePort | None = None,
    clock: Clock | None = None,
) -> Storefront:
    cfg = cfg or default_settings
    http = http or build_http_client(cfg)
    clock = clock or SystemClock()
    logger.info(
        "storefront_build api=%s http_backend=%s session_backend=%s",
        cfg.api_base_url,
        cfg.http_backend,
        cfg.session_backend,
    )

    movies = MoviesAdapter(http)
    categories = CategoriesAdapter(http)
    rentals = RentalsAdapter(http)

    session = SessionStore(
        persistence or build_persistence(cfg),
        clock=clock,
        fallback="drop" if cfg.grant_fallback == "drop" else "permissive",
    )
    catalog = CatalogStore(movies, categories)
    admin = AdminGate(cfg.admin_password)

    return Storefront(
        http=http,
        session=session,
        catalog=catalog,
        admin=admin,
        movies=movies,
        redeem=RedeemCodeUseCase(PayhipValidationAdapter(http), session),
        watch=WatchMovieUseCase(session, rentals, clock=clock),
        resume=ResumeRentalUseCase(session, rentals, clock=clock),
        browse=BrowseCatalogUseCase(catalog, session),
        chat=ChatWithAssistantUseCase(ChatAdapter(http)),
        survey=SubmitSurveyUseCase(SurveyAdapter(http), session),
        manage=ManageCatalogUseCase(admin, movies, categories, catalog),
    )
