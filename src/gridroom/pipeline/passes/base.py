"""
Base classes for room generation passes.

A pass is one phase of room generation (interior, walls, wall layers,
ceiling, corners). Each pass reads the RoomState, adds its placements, and
records its counters. Passes run in a fixed order but never depend on the
random numbers another pass consumed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..room_state import RoomState


@dataclass
class PassConfig:
    """
    Configuration for a generation pass.

    Attributes:
        enabled: Whether this pass should run
        options: Pass-specific configuration options
    """
    enabled: bool = True
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PassResult:
    """
    Result of executing a generation pass.

    Attributes:
        success: Whether the pass completed successfully
        state: The room state after the pass
        warnings: Non-fatal issues encountered
        errors: Fatal issues that prevented completion
        metrics: Placement counters
    """
    success: bool
    state: RoomState
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    skipped: bool = False

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_error(self, message: str) -> None:
        """Add an error message and mark as failed."""
        self.errors.append(message)
        self.success = False


class RoomPass(ABC):
    """Base class for composable room generation passes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier, also used as the metrics key."""
        pass

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def execute(self, state: RoomState, config: PassConfig) -> PassResult:
        """
        Execute this pass on the given room state.

        Args:
            state: The current room state
            config: Pass configuration

        Returns:
            PassResult with the state and any issues
        """
        pass

    def validate_preconditions(self, state: RoomState) -> List[str]:
        """Return error messages if the state cannot be processed."""
        return []

    def validate_postconditions(self, state: RoomState) -> List[str]:
        """Return messages for output that does not look right (reported as warnings)."""
        return []

    def run(self, state: RoomState, config: Optional[PassConfig] = None) -> PassResult:
        """
        Run this pass with precondition and postcondition checks.

        Disabled passes return a successful, skipped result without touching
        the state.
        """
        config = config or PassConfig()

        if not config.enabled:
            return PassResult(success=True, state=state, skipped=True)

        precondition_errors = self.validate_preconditions(state)
        if precondition_errors:
            result = PassResult(success=False, state=state)
            for error in precondition_errors:
                result.add_error(f"Precondition failed: {error}")
            return result

        result = self.execute(state, config)

        if result.success:
            for message in self.validate_postconditions(result.state):
                result.add_warning(f"Postcondition warning: {message}")

        state.metrics[self.name] = dict(result.metrics)
        return result
