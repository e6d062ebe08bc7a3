"""
Room generation pipeline.

Orchestrates the room passes in their fixed order:

    interior -> walls/doors -> wall layers -> ceiling -> corners

then hands every placed mesh to the instance sink and optionally validates
the result. All per-run state lives in a fresh RoomState, so calling
generate() again with the same inputs reproduces the same room.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from gridroom.generators.assets import AssetResolver, InstanceSink
from gridroom.generators.errors import ConfigurationMissingError, RoomGenerationError
from gridroom.generators.grid.grid_types import RoomSpec
from gridroom.generators.room.room_types import (
    DoorRecord, PlacementInstruction, RoomOverrides, WallSegmentRecord
)
from gridroom.generators.shapes import SHAPE_CATALOG, ShapeCatalog
from gridroom.generators.styles import STYLE_CATALOG, StyleCatalog, StylePacks
from gridroom.validation import ValidationResult, validate_generation
from .passes import (
    CeilingPass, CornerPass, InteriorPackingPass, PassConfig, RoomPass,
    VerticalLayerPass, WallLayoutPass,
)
from .room_state import RoomState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    INTERIOR = "interior"
    WALLS = "walls"
    WALL_LAYERS = "wall_layers"
    CEILING = "ceiling"
    CORNERS = "corners"
    EMIT = "emit"
    VALIDATE = "validate"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class PipelineError(RoomGenerationError):
    pass


# ---------------------------------------------------------------------------
# Settings / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass
class PipelineSettings:
    # Per-phase stream offsets added to the run seed
    interior_seed_offset: int = 0
    wall_seed_offset: int = 0
    ceiling_seed_offset: int = 0

    # Leave forced-empty cells without ceiling tiles
    ceiling_follows_floor_shape: bool = False

    # Run the room checks and attach them to the result
    validate_result: bool = True

    # Per-pass overrides keyed by pass name ("interior", "walls", ...)
    passes: Dict[str, PassConfig] = field(default_factory=dict)

    # Style used for parts the room does not name when no packs are passed in
    default_style: Optional[str] = None

    def pass_config(self, name: str) -> PassConfig:
        config = self.passes.get(name, PassConfig())
        options = dict(config.options)
        if name == "interior":
            options.setdefault('seed_offset', self.interior_seed_offset)
        elif name == "walls":
            options.setdefault('seed_offset', self.wall_seed_offset)
        elif name == "ceiling":
            options.setdefault('seed_offset', self.ceiling_seed_offset)
            options.setdefault('follow_floor_shape', self.ceiling_follows_floor_shape)
        return PassConfig(enabled=config.enabled, options=options)


@dataclass
class GenerationResult:
    success: bool
    seed: int = 0
    instructions: List[PlacementInstruction] = field(default_factory=list)
    segments: List[WallSegmentRecord] = field(default_factory=list)
    doors: List[DoorRecord] = field(default_factory=list)
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    validation: Optional[ValidationResult] = None
    state: Optional[RoomState] = None

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)

    def instructions_in(self, category: str) -> List[PlacementInstruction]:
        return [i for i in self.instructions if i.category == category]

    def signature(self) -> List[Tuple]:
        """Comparable form of the full output, for reproducibility checks."""
        return [i.key() for i in self.instructions]


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

_STAGE_FOR_PASS = {
    "interior": PipelineStage.INTERIOR,
    "walls": PipelineStage.WALLS,
    "wall_layers": PipelineStage.WALL_LAYERS,
    "ceiling": PipelineStage.CEILING,
    "corners": PipelineStage.CORNERS,
}


class RoomPipeline:
    """Generates one room from a RoomSpec, style packs, overrides and a seed."""

    def __init__(self, resolver: AssetResolver,
                 sink: Optional[InstanceSink] = None,
                 settings: Optional[PipelineSettings] = None,
                 style_catalog: Optional[StyleCatalog] = None,
                 shape_catalog: Optional[ShapeCatalog] = None):
        self.resolver = resolver
        self.sink = sink
        self.settings = settings or PipelineSettings()
        self.style_catalog = style_catalog or STYLE_CATALOG
        self.shape_catalog = shape_catalog or SHAPE_CATALOG

        self.passes: List[RoomPass] = [
            InteriorPackingPass(),
            WallLayoutPass(),
            VerticalLayerPass(),
            CeilingPass(),
            CornerPass(),
        ]
        self.current_stage = PipelineStage.INITIALIZE
        self._last_call: Optional[Tuple[RoomSpec, Optional[StylePacks], Optional[RoomOverrides], int]] = None

    # -- helpers --

    def _resolve_styles(self, room: RoomSpec, styles: Optional[StylePacks]) -> StylePacks:
        if styles is None:
            styles = self.style_catalog.resolve_for_room(room, self.settings.default_style)
        if styles.floor is None:
            raise ConfigurationMissingError("No floor style configured")
        if styles.wall is None:
            raise ConfigurationMissingError("No wall style configured")
        return styles

    def _build_state(self, room: RoomSpec, styles: StylePacks,
                     overrides: RoomOverrides, seed: int) -> RoomState:
        regions, cells = self.shape_catalog.forced_empty_for(room, overrides)
        return RoomState(
            room=room,
            styles=styles,
            overrides=overrides,
            seed=seed,
            resolver=self.resolver,
            forced_empty_regions=regions,
            forced_empty_cells=cells,
        )

    def _emit_to_sink(self, state: RoomState) -> int:
        if self.sink is None:
            return 0
        for instruction in state.instructions:
            self.sink.get_or_create_bucket(instruction.mesh).add_instance(instruction.transform)
        return len(state.instructions)

    # -- main entry --

    def generate(self, room: Optional[RoomSpec],
                 styles: Optional[StylePacks] = None,
                 overrides: Optional[RoomOverrides] = None,
                 seed: int = 0) -> GenerationResult:
        """
        Generate a room.

        Args:
            room: Grid dimensions (required)
            styles: Style packs; resolved from the style catalog when None
            overrides: Designer overrides; none when None
            seed: Run seed

        Returns:
            GenerationResult. A missing room or style gives success=False
            with an empty instruction list.
        """
        self._last_call = (room, styles, overrides, seed)
        result = GenerationResult(success=False, seed=seed)
        start_time = time.time()

        # Previous run's instances go first, even if this run fails
        if self.sink is not None:
            self.sink.clear()

        self.current_stage = PipelineStage.INITIALIZE
        try:
            if room is None:
                raise ConfigurationMissingError("No room spec")
            resolved_styles = self._resolve_styles(room, styles)
        except ConfigurationMissingError as e:
            logger.error("Room generation aborted: %s", e)
            result.add_error(str(e), self.current_stage)
            return result

        overrides = overrides if overrides is not None else RoomOverrides()
        state = self._build_state(room, resolved_styles, overrides, seed)
        result.state = state
        result.stages_completed.append(PipelineStage.INITIALIZE)
        logger.info("Generating %dx%d room (seed %d)", room.width, room.height, seed)

        for room_pass in self.passes:
            self.current_stage = _STAGE_FOR_PASS[room_pass.name]
            pass_result = room_pass.run(state, self.settings.pass_config(room_pass.name))

            for warning in pass_result.warnings:
                result.add_warning(warning, self.current_stage)
            if not pass_result.success:
                for error in pass_result.errors:
                    result.add_error(error, self.current_stage)
                logger.error("Pass '%s' failed: %s", room_pass.name, "; ".join(pass_result.errors))
                return result

            result.stages_completed.append(self.current_stage)

        self.current_stage = PipelineStage.EMIT
        emitted = self._emit_to_sink(state)
        result.stages_completed.append(PipelineStage.EMIT)

        if self.settings.validate_result:
            self.current_stage = PipelineStage.VALIDATE
            result.validation = validate_generation(state)
            for issue in result.validation.issues:
                result.add_warning(issue.format(), PipelineStage.VALIDATE)
            result.stages_completed.append(PipelineStage.VALIDATE)

        result.instructions = list(state.instructions)
        result.segments = list(state.segments)
        result.doors = list(state.doors)
        result.metrics = dict(state.metrics)
        result.metrics['instructions'] = len(state.instructions)
        result.metrics['emitted'] = emitted
        result.metrics['total_time'] = time.time() - start_time

        self.current_stage = PipelineStage.COMPLETE
        result.stages_completed.append(PipelineStage.COMPLETE)
        result.success = True
        logger.info("Room complete: %d placements in %.3fs",
                    len(result.instructions), result.metrics['total_time'])
        return result

    def regenerate(self) -> GenerationResult:
        """Repeat the last generate() call with the same inputs."""
        if self._last_call is None:
            raise PipelineError("Nothing to regenerate; call generate() first")
        room, styles, overrides, seed = self._last_call
        return self.generate(room, styles, overrides, seed)


def generate_room(room: RoomSpec,
                  resolver: AssetResolver,
                  styles: Optional[StylePacks] = None,
                  overrides: Optional[RoomOverrides] = None,
                  seed: int = 0,
                  sink: Optional[InstanceSink] = None,
                  settings: Optional[PipelineSettings] = None) -> GenerationResult:
    """One-shot convenience wrapper around RoomPipeline.generate()."""
    pipeline = RoomPipeline(resolver, sink=sink, settings=settings)
    return pipeline.generate(room, styles, overrides, seed)
