import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI

from fallwire.application import BringUpContext
from fallwire.domain import LifecycleError, UnresolvableError

logger = logging.getLogger(__name__)


def bring_up_lifespan(context: BringUpContext) -> Callable[[FastAPI], Any]:
    """Create a FastAPI lifespan that runs the bring-up pass on startup.

    The application does not start serving until every component is wired and
    every ``init``/``init_last`` hook has run. A wiring error aborts startup.

    Args:
        context: The context holding every registration.

    Returns:
        A lifespan callable for ``FastAPI(lifespan=...)``.

    Example:
        >>> context = BringUpContext()
        >>> context.register(UserRepository())
        >>> context.register(UserService())
        >>>
        >>> app = FastAPI(lifespan=bring_up_lifespan(context))
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Run bring-up before the application accepts requests."""
        context.start()
        app.state.bring_up_context = context
        logger.info("Application components wired")
        yield

    return lifespan


def create_component_dependency(context: BringUpContext, name: str) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable returning a wired component by name.

    Args:
        context: The context the component is registered in.
        name: The component's registered name.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> get_users = create_component_dependency(context, "user-service")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_users)):
        ...     return service.list()
    """

    def dependency() -> Any:
        """Return the component once bring-up has completed."""
        if not context.is_complete:
            raise LifecycleError(f"Component '{name}' requested before bring-up completed")
        instance = context.get(name)
        if instance is None:
            raise UnresolvableError(name, reason="it has not been registered")
        return instance

    return dependency
