from typing import NoReturn, Optional

import typer

from rental_storefront.application.errors import AdminAuthError, StorefrontError
from rental_storefront.application.use_cases.manage_catalog import ManageCatalogUseCase
from rental_storefront.application.use_cases.watch_movie import WatchResult
from rental_storefront.bootstrap import Storefront, build_storefront
from rental_storefront.config import configure_logging
from rental_storefront.domain.entities.assistant import SurveyAnswers
from rental_storefront.domain.entities.movie import Movie

app = typer.Typer(help="Rental storefront CLI")
admin_app = typer.Typer(help="Catalog administration (admin password required)")
app.add_typer(admin_app, name="admin")

_storefront: Optional[Storefront] = None


def get_storefront() -> Storefront:
    global _storefront
    if _storefront is None:
        _storefront = build_storefront()
    return _storefront


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    configure_logging("DEBUG" if verbose else None)


def _fail(message: Optional[str]) -> NoReturn:
    typer.echo(message or "Erreur", err=True)
    raise typer.Exit(code=1)


def _echo_movie(movie: Movie) -> None:
    category = f" [{movie.category}]" if movie.category else ""
    typer.echo(f"  {movie.id}  {movie.title}{category}")


def _echo_watch(result: WatchResult) -> None:
    if not result.ok:
        _fail(result.message)
    typer.echo(result.signed_url)


@app.command()
def redeem(code: str, email: str = typer.Option(..., "--email", "-e", prompt=True)) -> None:
    """Validate a purchase code and add it to the session."""
    result = get_storefront().redeem.execute(code, email)
    if result.access is None:
        _fail(result.message)
    typer.echo(f"Code ajouté: {result.access.grant.type}={result.access.grant.value}")


@app.command()
def codes() -> None:
    """List redeemed codes with their remaining time."""
    statuses = get_storefront().session.codes_with_status()
    if not statuses:
        typer.echo("Aucun code.")
        return
    for s in statuses:
        typer.echo(f"{s.code_preview}  {s.label}  {s.time_remaining}")


@app.command()
def remove(code: str) -> None:
    """Remove a redeemed code."""
    removed = get_storefront().session.remove_code(code)
    typer.echo("Code retiré." if removed else "Code inconnu.")


@app.command()
def logout() -> None:
    """Forget every code, rental and the customer email."""
    get_storefront().session.clear_session()
    typer.echo("Session effacée.")


@app.command()
def catalog(category: Optional[str] = typer.Option(None, "--category", "-c")) -> None:
    """Show the movies the current codes give access to."""
    view = get_storefront().browse.execute(category)
    if view.error:
        _fail(view.error)
    if view.recent:
        typer.echo("Nouveautés")
        for movie in view.recent:
            _echo_movie(movie)
    for group in view.groups:
        typer.echo(group.label)
        for movie in group.movies:
            _echo_movie(movie)


@app.command()
def watch(movie_id: str) -> None:
    """Request a rental and print its signed playback URL."""
    storefront = get_storefront()
    storefront.catalog.ensure_loaded()
    movie = storefront.catalog.get_movie(movie_id)
    if movie is None:
        _fail(storefront.catalog.error or f"Film introuvable: {movie_id}")
    _echo_watch(storefront.watch.execute(movie))


@app.command()
def resume(movie_id: str) -> None:
    """Print the signed URL of a cached rental, refreshing it when missing."""
    _echo_watch(get_storefront().resume.execute(movie_id))


@app.command()
def previews(public: bool = typer.Option(False, "--public", help="Public library previews")) -> None:
    storefront = get_storefront()
    try:
        if public:
            for p in storefront.movies.list_public_previews():
                typer.echo(f"  {p.id}  {p.title}  {p.embed_url}")
        else:
            for movie in storefront.movies.list_free_previews():
                _echo_movie(movie)
    except StorefrontError as exc:
        _fail(str(exc))


@app.command()
def chat(message: Optional[str] = typer.Argument(None)) -> None:
    """Ask the assistant. Without a message, starts an interactive conversation."""
    assistant = get_storefront().chat
    while True:
        text = message if message is not None else typer.prompt(">", default="", show_default=False)
        if not text.strip():
            return
        result = assistant.execute(text)
        if result.reply is None:
            _fail(result.message)
        typer.echo(result.reply)
        if message is not None:
            return


@app.command()
def survey(
    genre: list[str] = typer.Option([], "--genre", "-g"),
    like_more: list[str] = typer.Option([], "--like-more"),
    like_less: list[str] = typer.Option([], "--like-less"),
    frequency: Optional[str] = typer.Option(None, "--frequency", "-f"),
    email: Optional[str] = typer.Option(None, "--email", "-e"),
) -> None:
    answers = SurveyAnswers(tuple(genre), tuple(like_more), tuple(like_less), frequency)
    result = get_storefront().survey.execute(answers, email)
    if result.status != "SUBMITTED":
        _fail(result.message)
    typer.echo("Merci !")


def _admin(password: str) -> ManageCatalogUseCase:
    try:
        return get_storefront().manage.with_credentials(password)
    except AdminAuthError as exc:
        _fail(str(exc))


_PASSWORD = typer.Option(..., "--password", "-p", envvar="ADMIN_PASSWORD", prompt=True, hide_input=True)


@admin_app.command("categories")
def admin_categories() -> None:
    for c in get_storefront().manage.list_categories():
        typer.echo(f"{c.order:>3}  {c.slug}  {c.label}")


@admin_app.command("category-create")
def admin_category_create(
    slug: str,
    label: str,
    order: Optional[int] = typer.Option(None, "--order"),
    password: str = _PASSWORD,
) -> None:
    category = _admin(password).create_category(slug, label, order)
    typer.echo(f"Catégorie créée: {category.slug}")


@admin_app.command("category-update")
def admin_category_update(
    slug: str,
    label: Optional[str] = typer.Option(None, "--label"),
    order: Optional[int] = typer.Option(None, "--order"),
    new_slug: Optional[str] = typer.Option(None, "--new-slug"),
    password: str = _PASSWORD,
) -> None:
    category = _admin(password).update_category(slug, label=label, order=order, new_slug=new_slug)
    typer.echo(f"Catégorie mise à jour: {category.slug}")


@admin_app.command("category-delete")
def admin_category_delete(slug: str, password: str = _PASSWORD) -> None:
    _admin(password).delete_category(slug)
    typer.echo(f"Catégorie supprimée: {slug}")


@admin_app.command("movie-update")
def admin_movie_update(
    movie_id: str,
    category: Optional[str] = typer.Option(None, "--category"),
    title: Optional[str] = typer.Option(None, "--title"),
    free_preview: Optional[bool] = typer.Option(None, "--free-preview/--no-free-preview"),
    tag: Optional[list[str]] = typer.Option(None, "--tag"),
    password: str = _PASSWORD,
) -> None:
    movie = _admin(password).update_movie(
        movie_id, category=category, title=title, is_free_preview=free_preview, tags=tag or None
    )
    typer.echo(f"Film mis à jour: {movie.title}")
