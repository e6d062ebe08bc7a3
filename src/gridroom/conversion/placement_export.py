"""
Placement export utilities.

Export a generated room in various formats for:
- JSON for engine importers and external tools
- CSV for analysis/spreadsheets
"""

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict, Sequence

from gridroom.generators.room.room_types import DoorRecord, PlacementInstruction, WallSegmentRecord


def _instruction_to_dict(instruction: PlacementInstruction) -> Dict[str, Any]:
    t = instruction.transform.to_dict()
    return {
        'category': instruction.category,
        'mesh': instruction.mesh.name,
        'location': t['location'],
        'rotation': t['rotation'],
    }


def _segment_to_dict(segment: WallSegmentRecord) -> Dict[str, Any]:
    return {
        'edge': segment.edge.value,
        'start': segment.start_cell,
        'length': segment.length,
        'mesh': segment.base_mesh.name,
        'forced': segment.forced,
    }


def _door_to_dict(door: DoorRecord) -> Dict[str, Any]:
    return {
        'edge': door.edge.value,
        'start': door.start_cell,
        'footprint': door.footprint,
        'name': door.door.name,
        'mesh': door.frame_mesh.name if door.frame_mesh else None,
        'procedural': door.procedural,
        'frame': door.frame_transform.to_dict(),
        'actor': door.actor_transform.to_dict(),
        'connection_box_extent': list(door.door.connection_box_extent),
    }


def export_result_to_json(result, include_records: bool = True) -> str:
    """
    Export a GenerationResult as JSON.

    Args:
        result: GenerationResult to export
        include_records: Whether to include wall segment and door records

    Returns:
        JSON string
    """
    output: Dict[str, Any] = {
        'success': result.success,
        'seed': result.seed,
        'placements': [_instruction_to_dict(i) for i in result.instructions],
        'counts': count_instructions_by_category(result.instructions),
        'errors': list(result.errors),
        'warnings': list(result.warnings),
    }
    if include_records:
        output['walls'] = [_segment_to_dict(s) for s in result.segments]
        output['doors'] = [_door_to_dict(d) for d in result.doors]
    if result.validation is not None:
        output['validation'] = result.validation.to_dict()

    return json.dumps(output, indent=2)


def export_result_to_csv(result) -> str:
    """
    Export placements as CSV, one row per placed mesh.

    Returns:
        CSV format string
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(['category', 'mesh', 'x', 'y', 'z', 'pitch', 'yaw', 'roll'])

    for instruction in result.instructions:
        location = instruction.transform.location
        rotation = instruction.transform.rotator
        writer.writerow([
            instruction.category,
            instruction.mesh.name,
            location[0], location[1], location[2],
            rotation.pitch, rotation.yaw, rotation.roll,
        ])

    return output.getvalue()


def count_instructions_by_category(instructions: Sequence[PlacementInstruction]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for instruction in instructions:
        counts[instruction.category] = counts.get(instruction.category, 0) + 1
    return counts


def write_result(result, path) -> Path:
    """Write a result to disk; ``.csv`` selects CSV, anything else JSON."""
    path = Path(path)
    if path.suffix.lower() == '.csv':
        content = export_result_to_csv(result)
    else:
        content = export_result_to_json(result)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    return path
