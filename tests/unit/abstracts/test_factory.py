##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Tests for the `factory.py` module of the `abstracts/` directory.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from seeddb.abstracts import SeedDBBaseFactory


# --- Dummy Components ---
class DummyComponent:
    """A testable dummy component."""


class DummyComponentWithInit:
    def __init__(self, foo=None, bar=None):
        self.foo = foo
        self.bar = bar


class PluginComponent:
    """A component published through an entry point."""


# --- Concrete Subclass for Testing ---
class SampleFactory(SeedDBBaseFactory):
    def _register_builtins(self):
        self.register("dummy", DummyComponent, aliases=["alias_dummy"])

    def _validate_component(self, component_class: Any):
        if not isinstance(component_class, type):
            raise TypeError("Component must be a class")

    def _entry_point_group(self) -> str:
        return "seeddb.test_plugins"

    def _raise_component_error_class(self, msg: str):
        raise RuntimeError(msg)  # Use a distinct error type for test verification


def make_entry_point(name: str, loaded: Any = None, error: Exception = None) -> MagicMock:
    """
    Build a stand-in for an `importlib.metadata.EntryPoint`.

    Args:
        name: The entry point name.
        loaded: What `load()` returns.
        error: What `load()` raises, if anything.

    Returns:
        A mock entry point.
    """
    entry_point = MagicMock()
    entry_point.name = name
    entry_point.load.side_effect = error
    entry_point.load.return_value = loaded
    return entry_point


class TestSeedDBBaseFactory:
    """
    Unit test suite for the `SeedDBBaseFactory` abstract base class.

    This suite verifies the expected behavior of the factory's core logic through a
    concrete subclass (`SampleFactory`) that defines the required abstract methods.
    The tests ensure that the factory:

    - Registers components and their aliases correctly
    - Validates component classes during registration
    - Creates instances with and without initialization arguments
    - Resolves aliases when creating components
    - Raises appropriate errors for unknown components
    - Provides accurate component metadata through introspection
    - Discovers plugins from entry points exactly once
    """

    @pytest.fixture
    def no_plugins(self, mocker: MockerFixture) -> MagicMock:
        """
        Patch entry point discovery so that no plugins are installed.

        Args:
            mocker: PyTest mocker fixture.

        Returns:
            The mocked `entry_points` function.
        """
        return mocker.patch("seeddb.abstracts.factory.entry_points", return_value=[])

    @pytest.fixture
    def factory(self, no_plugins: MagicMock) -> SampleFactory:
        """
        An instance of the dummy `SampleFactory` class. Resets on each test.

        Args:
            no_plugins: The mocked `entry_points` function.

        Returns:
            An instance of the dummy `SampleFactory` class for testing.
        """
        return SampleFactory()

    def test_register_and_list(self, factory: SampleFactory):
        """
        Test that components are registered and listed properly.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        assert factory.list_available() == ["dummy"]
        assert factory._registry["dummy"] is DummyComponent
        assert factory._aliases["alias_dummy"] == "dummy"

    def test_create_component_without_config(self, factory: SampleFactory):
        """
        Test instantiation of a registered component with no config.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        assert isinstance(factory.create("dummy"), DummyComponent)

    def test_create_component_with_config(self, factory: SampleFactory):
        """
        Test instantiation of a component with constructor args.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        factory.register("with_init", DummyComponentWithInit)
        instance = factory.create("with_init", config={"foo": "a", "bar": 42})
        assert isinstance(instance, DummyComponentWithInit)
        assert instance.foo == "a"
        assert instance.bar == 42

    def test_create_component_using_alias(self, factory: SampleFactory):
        """
        Test alias resolution in component creation.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        assert isinstance(factory.create("alias_dummy"), DummyComponent)
        assert factory.resolve("alias_dummy") is DummyComponent

    def test_create_unregistered_component_raises(self, factory: SampleFactory):
        """
        Test that creating an unknown component raises the subclass's error and lists the alternatives.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        with pytest.raises(RuntimeError, match="'unknown' is not supported. Available components: dummy"):
            factory.create("unknown")

    def test_register_invalid_component_raises(self, factory: SampleFactory):
        """
        Test that register raises TypeError for non-class input.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        with pytest.raises(TypeError):
            factory.register("bad", object())  # not a class
        assert "bad" not in factory._registry

    def test_get_component_info(self, factory: SampleFactory):
        """
        Test metadata returned from `get_component_info`.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        info = factory.get_component_info("dummy")
        assert info == {
            "name": "dummy",
            "class": "DummyComponent",
            "module": DummyComponent.__module__,
            "description": "A testable dummy component.",
        }

    def test_get_component_info_for_alias(self, factory: SampleFactory):
        """
        Test that `get_component_info` reports the canonical name for an alias.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        assert factory.get_component_info("alias_dummy")["name"] == "dummy"

    def test_get_component_info_for_invalid_component(self, factory: SampleFactory):
        """
        Test that get_component_info raises when the component is unknown.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
        """
        with pytest.raises(RuntimeError, match="not supported"):
            factory.get_component_info("not_registered")

    def test_builtins_skip_discovery(self, factory: SampleFactory, no_plugins: MagicMock):
        """
        Test that resolving a built-in component doesn't look for plugins.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
            no_plugins: The mocked `entry_points` function.
        """
        factory.create("dummy")
        no_plugins.assert_not_called()

    def test_discover_plugins_runs_once(self, factory: SampleFactory, no_plugins: MagicMock):
        """
        Test that entry points are only scanned on the first lookup that needs them.

        Args:
            factory: An instance of the dummy `SampleFactory` class for testing.
            no_plugins: The mocked `entry_points` function.
        """
        factory.list_available()
        factory.list_available()
        no_plugins.assert_called_once_with(group="seeddb.test_plugins")

    def test_plugins_are_registered(self, mocker: MockerFixture):
        """
        Test that a component published through an entry point can be created by name.

        Args:
            mocker: PyTest mocker fixture.
        """
        mocker.patch(
            "seeddb.abstracts.factory.entry_points",
            return_value=[make_entry_point("plugin", loaded=PluginComponent)],
        )
        factory = SampleFactory()
        assert isinstance(factory.create("plugin"), PluginComponent)
        assert set(factory.list_available()) == {"dummy", "plugin"}

    def test_broken_plugin_is_skipped(self, mocker: MockerFixture, seeddb_caplog: pytest.LogCaptureFixture):
        """
        Test that a plugin failing to load is logged and doesn't hide the other components.

        Args:
            mocker: PyTest mocker fixture.
            seeddb_caplog: The caplog fixture capturing SeedDB's logs.
        """
        mocker.patch(
            "seeddb.abstracts.factory.entry_points",
            return_value=[
                make_entry_point("broken", error=ImportError("missing module")),
                make_entry_point("plugin", loaded=PluginComponent),
            ],
        )
        factory = SampleFactory()
        assert set(factory.list_available()) == {"dummy", "plugin"}
        assert "Failed to load plugin 'broken': missing module" in seeddb_caplog.text
