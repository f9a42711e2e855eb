"""Named step registry used to resolve steps referenced from decks."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping

from ..errors import DeckError
from .step_base import Step
from .steps import nop_step

logger = logging.getLogger(__name__)


class StepRegistry:
    """Registry that maps normalized step names to step callables."""

    def __init__(self, steps: Mapping[str, Step] | None = None) -> None:
        self._steps: dict[str, Step] = {}
        if steps:
            for name, step in steps.items():
                self.register(name, step)

    @staticmethod
    def _normalize(name: str) -> str:
        return str(name).strip().lower()

    def register(self, name: str, step: Step) -> None:
        if not callable(step):
            raise TypeError(f"Step '{name}' must be callable.")
        self._steps[self._normalize(name)] = step

    def resolve(self, name: str) -> Step | None:
        return self._steps.get(self._normalize(name))

    def supported_names(self) -> tuple[str, ...]:
        return tuple(self._steps)

    def resolve_ref(self, ref: str) -> Step:
        """Resolve a registered name or a ``module:attribute`` import reference."""
        step = self.resolve(ref)
        if step is not None:
            return step
        if ":" not in ref:
            supported = ", ".join(self.supported_names()) or "(none)"
            raise DeckError(
                f"Step '{ref}' is not registered. Use one of: {supported}, or a 'module:attribute' reference."
            )

        module_name, _, attr = ref.partition(":")
        if not module_name or not all(part.isidentifier() for part in module_name.split(".")):
            raise DeckError(f"Step '{ref}' must name an absolute module before ':', got '{module_name}'.")
        logger.debug("importing step %s from %s", attr, module_name)
        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise DeckError(f"Cannot import module '{module_name}' for step '{ref}': {exc}") from exc

        target: object = module
        for part in attr.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise DeckError(f"Module '{module_name}' has no attribute '{attr}' (step '{ref}').") from exc
        if not callable(target):
            raise DeckError(f"Step '{ref}' resolved to a non-callable {type(target).__name__}.")
        return target


def create_step_registry(steps: Mapping[str, Step]) -> StepRegistry:
    """Build a registry from a name -> step mapping."""
    return StepRegistry(steps=steps)


def build_default_registry() -> StepRegistry:
    """Registry holding the built-in steps."""
    return create_step_registry({"nop": nop_step})


__all__ = ["StepRegistry", "build_default_registry", "create_step_registry"]
