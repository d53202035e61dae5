from __future__ import annotations

import pytest

from rental_storefront.application.errors import ApiError
from rental_storefront.domain.entities.assistant import ChatMessage, SurveyAnswers
from rental_storefront.infrastructure.adapters.api.assistant_adapter import ChatAdapter, SurveyAdapter
from rental_storefront.infrastructure.adapters.api.catalog_adapter import CategoriesAdapter, MoviesAdapter
from rental_storefront.infrastructure.adapters.api.payhip_adapter import PayhipValidationAdapter
from rental_storefront.infrastructure.adapters.api.rentals_adapter import RentalsAdapter
from tests.unit._fakes import RoutedHttp, storefront_routes


def test_validation_reads_grant_fields():
    http = RoutedHttp(storefront_routes())
    validation = PayhipValidationAdapter(http).validate("FILM-1")
    assert http.requests == [("POST", "/api/payhip/validate", {"code": "FILM-1"})]
    assert (validation.success, validation.access_type, validation.access_value) == (True, "film", "m1")


def test_create_rental_sends_movie_email_and_code():
    http = RoutedHttp(storefront_routes())
    envelope = RentalsAdapter(http).create_rental("m1", "a@b.c", "FILM-1")
    assert http.requests[0][2] == {"movieId": "m1", "customerEmail": "a@b.c", "payhipCode": "FILM-1"}
    assert envelope.rental.id == "r1"
    assert envelope.signed_url == "https://cdn.test/m1?token=abc"


def test_fetch_rental_quotes_the_id():
    routes = storefront_routes()
    routes[("GET", "/api/rentals/r%2F1")] = {"data": {"rental": {"id": "r/1"}, "signedUrl": "https://cdn/x"}}
    envelope = RentalsAdapter(RoutedHttp(routes)).fetch_rental("r/1")
    assert envelope.rental.id == "r/1"


def test_movies_map_server_fields():
    movies = MoviesAdapter(RoutedHttp(storefront_routes())).list_movies()
    assert [(m.id, m.category, m.video_id) for m in movies] == [("m1", "drama", "v1"), ("m2", "comedy", "v2")]
    assert movies[1].is_free_preview


def test_payload_without_envelope_is_rejected():
    routes = storefront_routes()
    routes[("GET", "/api/movies")] = [{"_id": "m1"}]
    with pytest.raises(ApiError):
        MoviesAdapter(RoutedHttp(routes)).list_movies()


def test_category_update_sends_only_given_fields():
    routes = storefront_routes()
    routes[("PATCH", "/api/categories/drama")] = lambda body: {"data": {"slug": "drame", "label": "Drames"}}
    http = RoutedHttp(routes)
    category = CategoriesAdapter(http).update_category("drama", new_slug="drame")
    assert http.requests[0][2] == {"newSlug": "drame"}
    assert category.slug == "drame"


def test_chat_and_survey_bodies():
    http = RoutedHttp(storefront_routes())
    reply = ChatAdapter(http).send("Un drame ?", [ChatMessage("user", "Bonjour")])
    SurveyAdapter(http).submit(SurveyAnswers(genres=("drama",)), email="a@b.c")
    assert reply == "Essayez Alpha."
    assert http.requests[0][2] == {"message": "Un drame ?", "history": [{"role": "user", "content": "Bonjour"}]}
    assert http.requests[1][2]["email"] == "a@b.c"
    assert http.requests[1][2]["answers"]["genres"] == ["drama"]
