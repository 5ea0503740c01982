##############################################################################
# Copyright (c) SeedDB Project developers. See top-level LICENSE and COPYRIGHT
# files for dates and other details. No copyright assignment is required to
# contribute to SeedDB.
##############################################################################

"""
Base factory class for managing pluggable components in SeedDB.

This module defines an abstract `SeedDBBaseFactory` class that keeps a registry of
named component classes, resolves aliases (e.g. "sqlite3" -> "sqlite"), discovers
third-party components published under a Python entry point group, and instantiates
components on request.

Subclasses must define how to register built-in components, validate component classes,
and identify the appropriate entry point group for plugin discovery.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List


LOG = logging.getLogger(__name__)


class SeedDBBaseFactory(ABC):
    """
    Abstract base factory for managing and instantiating pluggable components.

    Attributes:
        _registry (Dict[str, Any]): Maps canonical component names to their classes.
        _aliases (Dict[str, str]): Maps alias names to canonical component names.
        _plugins_loaded (bool): Whether entry point discovery already ran.

    Methods:
        register: Register a new component and its optional aliases.
        list_available: Return a list of all registered component names.
        resolve: Return the class registered under a name or alias.
        create: Instantiate a registered component by name or alias.
        get_component_info: Return introspection metadata for a registered component.
    """

    def __init__(self):
        """
        Initialize the factory and register the built-in components.
        """
        self._registry: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._plugins_loaded: bool = False
        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """
        Register built-in components.
        """
        raise NotImplementedError("Subclasses of `SeedDBBaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Validate the component class before registration.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If `component_class` is not valid.
        """
        raise NotImplementedError("Subclasses of `SeedDBBaseFactory` must implement a `_validate_component` method.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """
        Return the entry point group used for plugin discovery.

        Returns:
            The entry point group used for plugin discovery.
        """
        raise NotImplementedError("Subclasses must define an entry point group.")

    def _raise_component_error_class(self, msg: str):
        """
        Raise an appropriate exception when an unknown component is requested.

        Subclasses should override this to raise more specific exceptions.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            ValueError: By default.
        """
        raise ValueError(msg)

    def _discover_plugins(self):
        """
        Discover and register components published under this factory's entry point group.

        Discovery only runs once per factory instance. A plugin that fails to load is
        logged and skipped so that one broken distribution can't hide the built-ins.
        """
        if self._plugins_loaded:
            return
        self._plugins_loaded = True

        for entry_point in entry_points(group=self._entry_point_group()):
            try:
                plugin_class = entry_point.load()
                self.register(entry_point.name, plugin_class)
                LOG.info(f"Loaded plugin via entry point: {entry_point.name}")
            except Exception as exc:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}': {exc}")

    def register(self, name: str, component_class: Any, aliases: List[str] = None) -> None:
        """
        Register a new component implementation.

        Args:
            name: Canonical name for the component.
            component_class: The class or implementation to register.
            aliases: Optional alternative names for this component.

        Raises:
            TypeError: If the component_class fails validation.
        """
        self._validate_component(component_class)

        self._registry[name] = component_class
        LOG.debug(f"Registered component: {name}")

        for alias in aliases or []:
            self._aliases[alias] = name
            LOG.debug(f"Registered alias '{alias}' for component '{name}'")

    def list_available(self) -> List[str]:
        """
        Return a list of supported component names, built-in and discovered.

        Returns:
            A list of canonical names for all available components.
        """
        self._discover_plugins()
        return list(self._registry.keys())

    def resolve(self, component_type: str) -> Any:
        """
        Return the class registered under `component_type`, resolving aliases first.

        Args:
            component_type: The name or alias of the component.

        Returns:
            The registered component class.

        Raises:
            Exception: The result of `_raise_component_error_class` if nothing is registered
                under that name.
        """
        canonical_name = self._aliases.get(component_type, component_type)

        if canonical_name not in self._registry:
            self._discover_plugins()

        component_class = self._registry.get(canonical_name)
        if component_class is None:
            available = ", ".join(self.list_available())
            self._raise_component_error_class(
                f"Component '{component_type}' is not supported. Available components: {available}"
            )

        return component_class

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Instantiate and return a component of the specified type.

        Args:
            component_type: The name or alias of the component to create.
            config: Optional keyword arguments for initializing the component.

        Returns:
            An instance of the requested component.
        """
        component_class = self.resolve(component_type)
        instance = component_class() if config is None else component_class(**config)
        LOG.debug(f"Created component '{component_type}'")
        return instance

    def get_component_info(self, component_type: str) -> Dict:
        """
        Get introspection information about a registered component.

        Args:
            component_type: The name or alias of the component.

        Returns:
            Dictionary containing the name, class, module, and docstring.
        """
        component_class = self.resolve(component_type)

        return {
            "name": self._aliases.get(component_type, component_type),
            "class": component_class.__name__,
            "module": component_class.__module__,
            "description": (component_class.__doc__ or "No description available").strip(),
        }
