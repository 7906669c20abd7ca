"""
Name-based lookup of solver classes.

Solver modules in this package register themselves with ``@register_solver``;
``SolverRegistry.auto_discover()`` imports them all when the package loads.
"""

import importlib
import inspect
import logging
import os
import pkgutil
from collections.abc import Callable

from .base import SolverBase

# Set up logging
logger = logging.getLogger(__name__)

_FRAMEWORK_MODULES = ("base", "registry", "config")


class SolverRegistry:
    """
    Class-level table of solver classes keyed by name.

    The first solver registered becomes the default returned for ``name=None``.
    """

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Add ``solver_cls`` under ``name``.

        Registering the same class twice is a no-op; a different class
        replaces the old one with a warning.

        Raises:
            TypeError: If ``solver_cls`` is not a SolverBase subclass
        """
        if not (inspect.isclass(solver_cls) and issubclass(solver_cls, SolverBase)):
            raise TypeError(f"{solver_cls!r} is not a SolverBase subclass")

        previous = cls._registry.get(name)
        if previous is solver_cls:
            return
        if previous is not None:
            logger.warning(f"Solver '{name}' re-registered: {previous.__name__} -> {solver_cls.__name__}")

        cls._registry[name] = solver_cls
        if cls._default_solver is None:
            cls._default_solver = name

    @classmethod
    def register_as(cls, name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
        """Class decorator form of :meth:`register`."""

        def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
            cls.register(name, solver_cls)
            return solver_cls

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a registration; the default falls back to any remaining solver."""
        cls._registry.pop(name, None)
        if cls._default_solver == name:
            cls._default_solver = next(iter(cls._registry), None)

    @classmethod
    def set_default(cls, name: str) -> None:
        if name not in cls._registry:
            raise ValueError(f"Unknown solver '{name}'")
        cls._default_solver = name

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Resolve a solver class.

        Args:
            name: Registered name; None selects the default solver

        Raises:
            ValueError: If the name is unknown or no solver is registered
        """
        if name is None:
            name = cls._default_solver
            if name is None:
                raise ValueError("No solvers are registered")

        solver_cls = cls._registry.get(name)
        if solver_cls is None:
            raise ValueError(f"Unknown solver '{name}'")
        return solver_cls

    @classmethod
    def list_solvers(cls) -> list[str]:
        return list(cls._registry)

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """
        Instantiate a registered solver.

        Args:
            name: Registered name; None selects the default solver
            **kwargs: Constructor arguments, e.g. ``formula`` or ``timeout``
        """
        return cls.get(name)(**kwargs)

    @classmethod
    def auto_discover(cls) -> None:
        """
        Import every solver module of this package and register the concrete
        SolverBase subclasses each one defines.
        """
        package = __name__.rpartition(".")[0]
        package_dir = os.path.dirname(os.path.abspath(__file__))

        for _, module_name, is_pkg in pkgutil.iter_modules([package_dir]):
            if is_pkg or module_name in _FRAMEWORK_MODULES:
                continue

            module = importlib.import_module(f"{package}.{module_name}")
            for class_name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, SolverBase)
                    and obj is not SolverBase
                    and not inspect.isabstract(obj)
                    and obj.__module__ == module.__name__
                ):
                    solver_name = getattr(obj, "solver_name", class_name.lower())
                    cls.register(solver_name, obj)
                    logger.debug(f"Discovered solver '{solver_name}' in {module.__name__}")


register_solver = SolverRegistry.register_as
