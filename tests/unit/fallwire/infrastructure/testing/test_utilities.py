"""Unit tests for testing utilities."""

from abc import ABC, abstractmethod
from unittest.mock import MagicMock

import pytest

from fallwire.domain import ComponentState, LifecycleError, RegistrationConflictError, ValueKind, value, wire
from fallwire.infrastructure.testing import TestBringUpContext, create_wired_context


class Database(ABC):
    @abstractmethod
    def query(self, sql: str): ...


class PostgresDatabase(Database):
    def query(self, sql: str):
        return []


class UserRepository:
    db = wire(Database)


class Settings:
    pass


class TestTestBringUpContext:
    """Test cases for TestBringUpContext."""

    def test_mock_component_found_by_capability(self):
        """Test that a stand-in satisfies capability bindings."""
        context = TestBringUpContext()
        mock_db = MagicMock()
        context.mock_component(mock_db, as_type=PostgresDatabase)
        repository = UserRepository()
        context.register_named(repository, "users")

        context.start()

        assert repository.db is mock_db

    def test_mock_component_found_by_type(self):
        """Test that a stand-in satisfies exact type bindings."""

        class Consumer:
            settings = wire(Settings)

        context = TestBringUpContext()
        mock_settings = MagicMock()
        context.mock_component(mock_settings, as_type=Settings)
        consumer = Consumer()
        context.register_named(consumer, "consumer")

        context.start()

        assert consumer.settings is mock_settings

    def test_mock_component_derives_name_from_type(self):
        """Test that the stand-in is named after the type it replaces."""
        context = TestBringUpContext()

        name = context.mock_component(MagicMock(), as_type=Settings)

        assert name == f"{Settings.__module__}.Settings"

    def test_mock_component_explicit_name(self):
        """Test registering a stand-in under an explicit name."""
        context = TestBringUpContext()
        mock = MagicMock()

        name = context.mock_component(mock, name="settings", as_type=Settings)

        assert name == "settings"
        assert context.get("settings") is mock

    def test_mock_component_is_wired_and_untouched(self):
        """Test that stand-ins are never wired or initialized."""
        context = TestBringUpContext()
        mock = MagicMock()
        context.mock_component(mock, name="mock")

        context.start()

        assert context.state_of("mock") == ComponentState.WIRED
        mock.init.assert_not_called()
        mock.init_last.assert_not_called()

    def test_mock_component_name_conflict(self):
        """Test that stand-ins share the component namespace."""
        context = TestBringUpContext()
        context.register_named(Settings(), "settings")

        with pytest.raises(RegistrationConflictError):
            context.mock_component(MagicMock(), name="settings")

    def test_mock_component_after_start_raises(self):
        """Test that stand-ins cannot be added after bring-up started."""
        context = TestBringUpContext()
        context.start()

        with pytest.raises(LifecycleError):
            context.mock_component(MagicMock(), name="late")

    def test_context_manager(self):
        """Test using TestBringUpContext as context manager."""
        with TestBringUpContext() as context:
            context.register_named(Settings(), "settings")
            context.start()
            assert context.is_complete

    def test_context_manager_does_not_suppress(self):
        """Test that errors inside the with block propagate."""
        with pytest.raises(ValueError):
            with TestBringUpContext():
                raise ValueError("boom")


class TestCreateWiredContext:
    """Test cases for create_wired_context."""

    def test_create_wired_context_with_instances(self):
        """Test that plain instances are registered under derived names."""
        database = PostgresDatabase()
        repository = UserRepository()

        context = create_wired_context(database, repository)

        assert context.is_complete
        assert repository.db is database
        assert context.get(f"{PostgresDatabase.__module__}.PostgresDatabase") is database

    def test_create_wired_context_with_named_entries(self):
        """Test that (name, instance) tuples are registered under the name."""
        database = PostgresDatabase()

        context = create_wired_context(("db", database), ("users", UserRepository()))

        assert context.get("db") is database
        assert context.get("users").db is database

    def test_create_wired_context_with_values(self):
        """Test that values are registered before bring-up."""

        class Server:
            port = value("port", ValueKind.INT)

        server = Server()

        create_wired_context(("server", server), values={"port": "8080"})

        assert server.port == 8080

    def test_create_wired_context_empty(self):
        """Test creating a context with nothing registered."""
        context = create_wired_context()

        assert isinstance(context, TestBringUpContext)
        assert context.is_complete
