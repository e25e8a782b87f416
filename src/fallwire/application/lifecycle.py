import logging

from fallwire.application.registry import ComponentRegistry
from fallwire.domain import ILateInitializable, ILifecycleDriver, IResolver

logger = logging.getLogger(__name__)


class LifecycleDriver(ILifecycleDriver):
    """Runs the two phases of a bring-up pass.

    Phase 1 wires every component that is not wired yet; the resolver calls
    each component's ``init`` hook as soon as its own fields are populated.
    Phase 2 starts only once every component is wired and calls ``init_last``
    on the components that define it.

    Attributes:
        _registry: Components to bring up, iterated in registration order.
        _resolver: Wires a single component and its dependency closure.
    """

    def __init__(self, registry: ComponentRegistry, resolver: IResolver) -> None:
        self._registry = registry
        self._resolver = resolver

    def run(self) -> None:
        """Wire every component, then call every late completion hook.

        Any error aborts the pass immediately and propagates unchanged.
        """
        self.wire_all()
        self.init_last_all()

    def wire_all(self) -> int:
        """Phase 1.

        Returns:
            Number of wiring roots: components this loop wired directly.
            Dependencies wired recursively under an earlier root are not
            counted.
        """
        wired = 0
        for component in self._registry.components():
            if component.is_wired:
                continue
            self._resolver.wire(component)
            wired += 1
        logger.debug("Phase 1 complete, %d wiring roots", wired)
        return wired

    def init_last_all(self) -> int:
        """Phase 2.

        Returns:
            Number of ``init_last`` hooks called.
        """
        called = 0
        for component in self._registry.components():
            if (
                component.run_hooks
                and isinstance(component.instance, ILateInitializable)
                and callable(component.instance.init_last)
            ):
                logger.debug("Calling init_last on %s", component.name)
                component.instance.init_last()
                called += 1
        logger.debug("Phase 2 complete, %d late hooks", called)
        return called
