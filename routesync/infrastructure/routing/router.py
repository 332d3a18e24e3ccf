"""Programmatic express-style router.

Builds route trees with the same shape an express application holds at
runtime: routes compiled with ``end=True``, mounts and middleware with
``end=False``, method handlers inside each route's own stack.

Usage:
    users = Router()
    users.use(gateway_endpoint(tags=["users"]))
    users.get("/:id", get_user)
    users.route("/:id/avatar").get(get_avatar).put(put_avatar)

    app = Router()
    app.use("/users", users)
    tree = app.build()
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from routesync.domain import route_tree as tree
from routesync.domain.value_objects import PathPattern
from routesync.infrastructure.routing.markers import find_route_metadata
from routesync.infrastructure.routing.path_to_regexp import compile_path

type Handler = Callable[..., Any] | Router

_HANDLER_PATTERN = compile_path("/")


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__name__", None) or type(handler).__name__


def _method_layer(method: str | None, handler: Handler) -> tree.MethodLayer:
    if isinstance(handler, Router):
        return tree.MethodLayer(
            method=method, handler=handler.build(), pattern=_HANDLER_PATTERN
        )
    return tree.MethodLayer(
        method=method,
        handler=handler,
        pattern=_HANDLER_PATTERN,
        metadata=find_route_metadata(handler),
    )


class RouteBuilder:
    """A single route; methods chain like ``route.get(h).post(h)``.

    Args:
        path: Declared path of the route.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._handlers: list[tuple[str | None, Handler]] = []

    def get(self, *handlers: Handler) -> RouteBuilder:
        return self._add("get", handlers)

    def post(self, *handlers: Handler) -> RouteBuilder:
        return self._add("post", handlers)

    def put(self, *handlers: Handler) -> RouteBuilder:
        return self._add("put", handlers)

    def patch(self, *handlers: Handler) -> RouteBuilder:
        return self._add("patch", handlers)

    def delete(self, *handlers: Handler) -> RouteBuilder:
        return self._add("delete", handlers)

    def head(self, *handlers: Handler) -> RouteBuilder:
        return self._add("head", handlers)

    def options(self, *handlers: Handler) -> RouteBuilder:
        return self._add("options", handlers)

    def all(self, *handlers: Handler) -> RouteBuilder:
        """Handle every method (the route is then not registered as an operation)."""
        return self._add(None, handlers)

    def build(self) -> tree.Route:
        return tree.Route(
            path=self.path,
            stack=tuple(_method_layer(m, h) for m, h in self._handlers),
        )

    def _add(self, method: str | None, handlers: tuple[Handler, ...]) -> RouteBuilder:
        if not handlers:
            raise TypeError(f"Route.{method or 'all'}() requires at least one handler")
        for handler in handlers:
            self._handlers.append((method, handler))
        return self


@dataclass(frozen=True, slots=True)
class _Use:
    path: str
    handler: Handler


class Router:
    """Express-style router building an immutable route tree.

    Sub-routers are referenced, not copied: routes added to a sub-router
    after it was mounted still appear in the built tree.

    Args:
        case_sensitive: Compile patterns case sensitively.
        strict: Disallow optional trailing slashes.
    """

    def __init__(self, *, case_sensitive: bool = False, strict: bool = False) -> None:
        self._case_sensitive = case_sensitive
        self._strict = strict
        self._stack: list[RouteBuilder | _Use] = []

    def route(self, path: str) -> RouteBuilder:
        """Add a route and return it for chained method registration."""
        route = RouteBuilder(path)
        self._stack.append(route)
        return route

    def get(self, path: str, *handlers: Handler) -> Router:
        self.route(path).get(*handlers)
        return self

    def post(self, path: str, *handlers: Handler) -> Router:
        self.route(path).post(*handlers)
        return self

    def put(self, path: str, *handlers: Handler) -> Router:
        self.route(path).put(*handlers)
        return self

    def patch(self, path: str, *handlers: Handler) -> Router:
        self.route(path).patch(*handlers)
        return self

    def delete(self, path: str, *handlers: Handler) -> Router:
        self.route(path).delete(*handlers)
        return self

    def head(self, path: str, *handlers: Handler) -> Router:
        self.route(path).head(*handlers)
        return self

    def options(self, path: str, *handlers: Handler) -> Router:
        self.route(path).options(*handlers)
        return self

    def all(self, path: str, *handlers: Handler) -> Router:
        self.route(path).all(*handlers)
        return self

    def use(self, *args: str | Handler) -> Router:
        """Mount middleware, markers or sub-routers, optionally under a path.

        Args:
            *args: Optional leading path (default "/") followed by handlers.

        Raises:
            TypeError: If no handler is given.
        """
        path = "/"
        handlers = args
        if args and isinstance(args[0], str):
            path, handlers = args[0], args[1:]
        if not handlers:
            raise TypeError("Router.use() requires at least one handler")

        for handler in handlers:
            if isinstance(handler, str):
                raise TypeError(
                    f"Router.use() expected a handler, got path {handler!r}"
                )
            self._stack.append(_Use(path, handler))
        return self

    def build(self) -> tree.Router:
        """Snapshot the router into an immutable route tree."""
        return tree.Router(stack=tuple(self._build_layer(e) for e in self._stack))

    def _build_layer(self, entry: RouteBuilder | _Use) -> tree.Layer:
        match entry:
            case RouteBuilder():
                return tree.RouteLayer(
                    pattern=self._compile(entry.path, end=True),
                    route=entry.build(),
                )
            case _Use(path=path, handler=Router() as router):
                return tree.MountLayer(
                    pattern=self._compile(path, end=False),
                    router=router.build(),
                )
            case _Use(path=path, handler=handler):
                metadata = find_route_metadata(handler)
                if metadata is not None:
                    return tree.MetadataLayer(metadata=metadata)
                return tree.MiddlewareLayer(
                    name=_handler_name(handler),
                    pattern=self._compile(path, end=False),
                )

    def _compile(self, path: str, *, end: bool) -> PathPattern:
        return compile_path(
            path, end=end, strict=self._strict, sensitive=self._case_sensitive
        )
