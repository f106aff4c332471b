import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from databases import Database
from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Route

from app import config
from app.html.recipe_detail import RecipeDetail
from domain.collection_store import CollectionStore, favorites_store, library_store
from domain.recipe_client import RecipeClient, mealdb_client_factory
from domain.repository import DatabaseKeyValueStore
from domain.services import RecipeNotFound, details, membership, search, toggle
from domain.storage import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def templates(request: Request) -> Environment:
    return request.app.state.templates


def collection(request: Request, name: str) -> CollectionStore:
    state = request.app.state
    return state.library if name == "library" else state.favorites


@contextlib.asynccontextmanager
async def open_kv_store(cfg: config.Config) -> AsyncIterator[KeyValueStore]:
    match cfg.storage:
        case config.Storage.database:
            db = Database(cfg.db_url)
            await db.connect()
            kv = DatabaseKeyValueStore(db)
            await kv.create()
            try:
                yield kv
            finally:
                await db.disconnect()
        case config.Storage.file:
            yield JsonFileKeyValueStore(cfg.storage_path)
        case config.Storage.memory:
            yield MemoryKeyValueStore()


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    cfg: config.Config = app.state.config
    async with contextlib.AsyncExitStack() as stack:
        kv = app.state.kv
        if kv is None:
            kv = await stack.enter_async_context(open_kv_store(cfg))
        app.state.library = library_store(kv, cfg.key_prefix)
        app.state.favorites = favorites_store(kv, cfg.key_prefix)

        client = app.state.client
        if client is None:
            client = RecipeClient(
                mealdb_client_factory(cfg.mealdb_url, cfg.http_timeout)
            )
            stack.push_async_callback(client.aclose)
        app.state.client = client

        logger.info("Storage ready (%s).", cfg.storage.value)
        yield


@aHTMLResponse
async def homepage(request: Request) -> str:
    return templates(request).get_template("index.html").render()


@aHTMLResponse
async def search_recipes(request: Request) -> str:
    term = request.query_params.get("ingredient", "")
    recipes = await search(term, client=request.app.state.client)
    return templates(request).get_template("recipe-list.html").render(
        recipes=recipes, term=term
    )


async def render_detail(request: Request, collection_name: str | None = None) -> str:
    id = request.path_params["id"]
    recipe = await details(id, client=request.app.state.client)
    status = await membership(
        recipe.id,
        library=request.app.state.library,
        favorites=request.app.state.favorites,
    )

    result = None
    if collection_name is not None:
        member = (
            status.in_library if collection_name == "library" else status.is_favorite
        )
        result = await toggle(
            collection(request, collection_name), recipe, member=member
        )
        status = (
            status._replace(in_library=result.member)
            if collection_name == "library"
            else status._replace(is_favorite=result.member)
        )

    return RecipeDetail(
        recipe,
        membership=status,
        toggle=result,
        environment=templates(request),
    ).render()


@aHTMLResponse
async def recipe_detail(request: Request) -> str | tuple[str, int]:
    try:
        return await render_detail(request)
    except RecipeNotFound:
        return "Recipe not found or error fetching details.", 404


@aHTMLResponse
async def toggle_membership(request: Request) -> str | tuple[str, int]:
    if request.path_params["collection"] not in ("library", "favorites"):
        return "Unknown collection.", 404
    try:
        return await render_detail(request, request.path_params["collection"])
    except RecipeNotFound:
        return "Recipe not found or error fetching details.", 404


def collection_page(name: str, title: str, empty: str):
    @aHTMLResponse
    async def page(request: Request) -> str:
        recipes = await collection(request, name).list()
        return templates(request).get_template("collection.html").render(
            title=title, empty=empty, recipes=recipes
        )

    return page


def create_app(
    cfg: config.Config | None = None,
    *,
    kv: KeyValueStore | None = None,
    client: RecipeClient | None = None,
) -> Starlette:
    cfg = config.Config() if cfg is None else cfg
    configure_logging(cfg.log_level)

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/recipes/", search_recipes),
            Route("/recipes/{id}", recipe_detail),
            Route(
                "/recipes/{id}/{collection:str}",
                toggle_membership,
                methods=["POST"],
            ),
            Route(
                "/library",
                collection_page(
                    "library",
                    "My Library",
                    "Your library is empty. Save some recipes to see them here!",
                ),
            ),
            Route(
                "/favorites",
                collection_page(
                    "favorites",
                    "My Favorites",
                    "You have no favorite recipes yet. Tap the heart on a recipe!",
                ),
            ),
        ],
        lifespan=lifespan,
    )

    app.state.templates = Environment(
        loader=FileSystemLoader(cfg.html_dir),
        autoescape=select_autoescape(),
    )
    app.state.config = cfg
    app.state.kv = kv
    app.state.client = client
    return app


app = create_app()
