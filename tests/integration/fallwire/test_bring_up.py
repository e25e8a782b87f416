"""Integration tests for a complete bring-up pass."""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

import pytest

from fallwire import (
    AmbiguousDependencyError,
    Bindings,
    BringUpContext,
    CircularDependencyError,
    ComponentState,
    ConversionError,
    UnresolvableError,
    ValueKind,
    named,
    value,
    wire,
)


class Logger(ABC):
    @abstractmethod
    def log(self, message: str) -> None: ...


class ConsoleLogger(Logger):
    def __init__(self):
        self.lines: List[str] = []

    def log(self, message: str) -> None:
        self.lines.append(message)


class FileLogger(Logger):
    def log(self, message: str) -> None:
        pass


class App:
    logger = wire(Logger)


class Tracker:
    """Shared journal of hook calls."""

    def __init__(self):
        self.events: List[str] = []


class Tracked:
    def __init__(self, label: str, tracker: Tracker):
        self.label = label
        self.tracker = tracker

    def init(self):
        self.tracker.events.append(f"init:{self.label}")

    def init_last(self):
        self.tracker.events.append(f"init_last:{self.label}")


class TestLayeredApplication:
    """Test cases for a realistic layered application."""

    def test_full_bring_up(self):
        """Test wiring values, names, types and capabilities in one pass."""

        class Repository:
            logger = wire(Logger)
            dsn = value("db.dsn", ValueKind.STRING)

            def init(self):
                self.logger.log(f"repository connected to {self.dsn}")

        class Service:
            repository = wire(Repository)
            cache = named("cache")
            retries = value("service.retries", ValueKind.UINT8)

        class Server:
            service = wire(Service)
            logger = wire(Optional[Logger])
            port = value("http.port", ValueKind.INT)
            debug = value("debug", ValueKind.BOOL)

            def init_last(self):
                self.logger.log(f"listening on {self.port}")

        context = BringUpContext()
        context.load_values_from_text("db.dsn=postgres://db\nhttp.port=8080\nservice.retries=3\n")
        context.register_value("debug", "true")

        logger = ConsoleLogger()
        cache = {}
        repository = Repository()
        service = Service()
        server = Server()
        context.register_named(server, "server")
        context.register_named(service, "service")
        context.register(repository)
        context.register_named(cache, "cache")
        context.register(logger)

        context.start()

        assert server.service is service
        assert server.logger is logger
        assert server.port == 8080
        assert server.debug is True
        assert service.repository is repository
        assert service.cache is cache
        assert service.retries == 3
        assert repository.logger is logger
        assert logger.lines == ["repository connected to postgres://db", "listening on 8080"]
        for name in ("server", "service", "cache"):
            assert context.state_of(name) == ComponentState.WIRED

    def test_get_returns_registered_reference(self):
        """Test that get hands back exactly what was registered."""
        context = BringUpContext()
        logger = ConsoleLogger()
        app = App()
        context.register_named(logger, "logger")
        context.register_named(app, "app")

        context.start()

        assert context.get("logger") is logger
        assert context.get("app") is app
        assert context.get("nobody") is None

    def test_copy_binding_gets_snapshot(self):
        """Test that a by-value binding receives a copy of the wired target."""

        class Config:
            def __init__(self):
                self.flags = {"a": 1}

        class Reader:
            config = wire(Config, by_reference=False)

        context = BringUpContext()
        config = Config()
        reader = Reader()
        context.register_named(config, "config")
        context.register_named(reader, "reader")

        context.start()

        assert reader.config is not config
        assert isinstance(reader.config, Config)
        assert reader.config.flags == {"a": 1}


class TestHookOrdering:
    """Test cases for init and init_last ordering."""

    def test_dependencies_initialize_first(self):
        """Test that init runs after every transitive dependency's init."""
        tracker = Tracker()
        top = Tracked("top", tracker)
        middle = Tracked("middle", tracker)
        bottom = Tracked("bottom", tracker)

        context = BringUpContext()
        context.register_named(top, "top", bindings=Bindings().named("below", "middle"))
        context.register_named(middle, "middle", bindings=Bindings().named("below", "bottom"))
        context.register_named(bottom, "bottom")

        context.start()

        assert tracker.events[:3] == ["init:bottom", "init:middle", "init:top"]

    @pytest.mark.parametrize("order", [("a", "b", "c"), ("c", "b", "a"), ("b", "c", "a")])
    def test_late_hooks_run_after_every_early_hook(self, order):
        """Test that init_last never runs before any init, whatever the registration order."""
        tracker = Tracker()
        bindings = {
            "a": Bindings().named("next", "b"),
            "b": Bindings().named("next", "c"),
            "c": Bindings(),
        }
        context = BringUpContext()
        for label in order:
            context.register_named(Tracked(label, tracker), label, bindings=bindings[label])

        context.start()

        early = [event for event in tracker.events if event.startswith("init:")]
        late = [event for event in tracker.events if event.startswith("init_last:")]
        assert len(early) == 3
        assert tracker.events[:3] == early
        assert late == [f"init_last:{label}" for label in order]
        assert tracker.events.index("init:c") < tracker.events.index("init:b") < tracker.events.index("init:a")

    def test_shared_dependency_initialized_once(self):
        """Test that a dependency shared by several components is wired once."""
        tracker = Tracker()
        shared = Tracked("shared", tracker)

        context = BringUpContext()
        context.register_named(Tracked("left", tracker), "left", bindings=Bindings().named("dep", "shared"))
        context.register_named(Tracked("right", tracker), "right", bindings=Bindings().named("dep", "shared"))
        context.register_named(shared, "shared")

        context.start()

        assert tracker.events.count("init:shared") == 1
        assert tracker.events.count("init_last:shared") == 1


class TestCapabilityResolution:
    """Test cases for capability-based wiring."""

    def test_single_capability_provider(self):
        """Test that one provider satisfies a capability binding."""
        context = BringUpContext()
        logger = ConsoleLogger()
        app = App()
        context.register(logger)
        context.register_named(app, "app")

        context.start()

        assert app.logger is logger

    def test_no_capability_provider(self):
        """Test that a capability with no provider is unresolvable."""
        context = BringUpContext()
        context.register_named(App(), "app")

        with pytest.raises(UnresolvableError) as exc_info:
            context.start()

        assert exc_info.value.component == "app"
        assert exc_info.value.field == "logger"

    def test_two_capability_providers_are_ambiguous(self):
        """Test that two loggers make a logger binding ambiguous."""
        context = BringUpContext()
        context.register_named(ConsoleLogger(), "l1")
        context.register_named(FileLogger(), "l2")
        context.register_named(App(), "a")

        with pytest.raises(AmbiguousDependencyError) as exc_info:
            context.start()

        assert exc_info.value.component == "a"
        assert exc_info.value.field == "logger"
        assert exc_info.value.candidates == ["l1", "l2"]

    def test_two_instances_of_concrete_type_are_ambiguous(self):
        """Test that two instances of one concrete type make a type binding ambiguous."""

        class Consumer:
            logger = wire(ConsoleLogger)

        context = BringUpContext()
        context.register_named(ConsoleLogger(), "first")
        context.register_named(ConsoleLogger(), "second")
        context.register_named(Consumer(), "consumer")

        with pytest.raises(AmbiguousDependencyError):
            context.start()

    def test_structural_protocol_advertised_explicitly(self):
        """Test that a Protocol is satisfied by a component advertising it."""

        @runtime_checkable
        class Clock(Protocol):
            def now(self) -> int: ...

        class FixedClock:
            def now(self) -> int:
                return 42

        class Scheduler:
            clock = wire(Clock)

        context = BringUpContext()
        clock = FixedClock()
        scheduler = Scheduler()
        context.register_named(clock, "clock", capabilities=[Clock])
        context.register_named(scheduler, "scheduler")

        context.start()

        assert scheduler.clock is clock


class TestValueConversion:
    """Test cases for value injection."""

    def test_port_string_converted_to_int(self):
        """Test that "8080" becomes the integer 8080."""

        class Server:
            port = value("port", ValueKind.INT)

        context = BringUpContext()
        server = Server()
        context.register_value("port", "8080")
        context.register_named(server, "server")

        context.start()

        assert server.port == 8080
        assert isinstance(server.port, int)

    def test_non_numeric_port_fails(self):
        """Test that "abc" cannot be injected into an integer field."""

        class Server:
            port = value("port", ValueKind.INT)

        context = BringUpContext()
        context.register_value("port", "abc")
        context.register_named(Server(), "server")

        with pytest.raises(ConversionError) as exc_info:
            context.start()

        assert exc_info.value.component == "server"
        assert exc_info.value.field == "port"
        assert exc_info.value.value == "abc"

    def test_missing_value_is_unresolvable(self):
        """Test that a value binding with no value fails."""

        class Server:
            port = value("port", ValueKind.INT)

        context = BringUpContext()
        context.register_named(Server(), "server")

        with pytest.raises(UnresolvableError, match="port"):
            context.start()


class TestCycles:
    """Test cases for cycle detection."""

    def test_two_component_cycle(self):
        """Test that X needing Y needing X is reported with the full path."""
        context = BringUpContext()
        context.register_named(Tracked("x", Tracker()), "X", bindings=Bindings().named("peer", "Y"))
        context.register_named(Tracked("y", Tracker()), "Y", bindings=Bindings().named("peer", "X"))

        with pytest.raises(CircularDependencyError) as exc_info:
            context.start()

        assert exc_info.value.dependency_chain == ["X", "Y", "X"]

    def test_self_cycle(self):
        """Test that a component depending on itself is a cycle."""
        context = BringUpContext()
        context.register_named(Tracked("x", Tracker()), "X", bindings=Bindings().named("me", "X"))

        with pytest.raises(CircularDependencyError) as exc_info:
            context.start()

        assert exc_info.value.dependency_chain == ["X", "X"]

    def test_cycle_through_types(self):
        """Test that cycles through type bindings are detected."""

        class Left:
            pass

        class Right:
            left = wire(Left)

        context = BringUpContext()
        context.register_named(Left(), "left", bindings=Bindings().wire("right", Right))
        context.register_named(Right(), "right")

        with pytest.raises(CircularDependencyError) as exc_info:
            context.start()

        assert exc_info.value.dependency_chain == ["left", "right", "left"]

    def test_hooks_not_run_on_cycle(self):
        """Test that no early hook of a component in a cycle runs."""
        tracker = Tracker()
        context = BringUpContext()
        context.register_named(Tracked("x", tracker), "X", bindings=Bindings().named("peer", "Y"))
        context.register_named(Tracked("y", tracker), "Y", bindings=Bindings().named("peer", "X"))

        with pytest.raises(CircularDependencyError):
            context.start()

        assert tracker.events == []
