"""Request builder — turns validated input into a Runware wire task.

Required wire fields are copied verbatim. Optional wire fields are copied
only when ``should_include`` holds, so a validated ``0``, ``""`` or
``False`` never reaches the remote service.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from runware_connector.constraints import Operation
from runware_connector.registry import REMBG_MODEL, get_operation_spec

TaskRequest = dict[str, Any]


@dataclass(frozen=True)
class TaskTemplate:
    task_type: str
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    fixed: dict[str, Any] = field(default_factory=dict)


TASK_TEMPLATES: dict[Operation, TaskTemplate] = {
    Operation.TEXT_TO_IMAGE: TaskTemplate(
        task_type="imageInference",
        required=("positivePrompt", "model", "width", "height"),
        optional=("negativePrompt", "steps", "CFGScale", "scheduler", "seed", "vae", "clipSkip"),
    ),
    Operation.IMAGE_TO_IMAGE: TaskTemplate(
        task_type="imageInference",
        required=("seedImage", "strength", "positivePrompt", "model", "width", "height"),
        optional=("negativePrompt", "steps", "CFGScale", "scheduler"),
    ),
    Operation.TEXT_TO_VIDEO: TaskTemplate(
        task_type="videoInference",
        required=("positivePrompt", "model", "duration"),
        optional=(
            "negativePrompt", "width", "height", "fps",
            "steps", "seed", "CFGScale", "numberResults",
        ),
        fixed={"deliveryMethod": "async"},
    ),
    Operation.BACKGROUND_REMOVAL: TaskTemplate(
        task_type="imageBackgroundRemoval",
        required=("inputImage", "model"),
        optional=("outputType", "outputFormat"),
    ),
}

# Grouped under "settings", and only ever sent for the RemBG model
REMBG_SETTINGS_FIELDS: tuple[str, ...] = (
    "rgba",
    "postProcessMask",
    "returnOnlyMask",
    "alphaMatting",
    "alphaMattingForegroundThreshold",
    "alphaMattingBackgroundThreshold",
    "alphaMattingErodeSize",
)


def should_include(value: Any) -> bool:
    """Present and truthy: 0, 0.0, "", False, [] and None are all excluded."""
    return value is not None and bool(value)


def build_settings(validated: Mapping[str, Any]) -> dict[str, Any] | None:
    """Return the background-removal settings object, or None.

    Only the RemBG model takes settings; for every other model the settings
    fields are dropped even when supplied.
    """
    if validated.get("model") != REMBG_MODEL:
        return None

    settings = {
        name: validated[name]
        for name in REMBG_SETTINGS_FIELDS
        if should_include(validated.get(name))
    }
    return settings or None


def build_task(operation: Operation | str, validated: Mapping[str, Any]) -> TaskRequest:
    """Build the wire task for one validated input.

    Every call generates a fresh UUID v4 ``taskUUID``.
    """
    spec = get_operation_spec(operation)
    template = TASK_TEMPLATES[spec.operation]

    task: TaskRequest = {
        "taskType": template.task_type,
        "taskUUID": str(uuid.uuid4()),
        **template.fixed,
    }
    for name in template.required:
        task[name] = validated[name]
    for name in template.optional:
        if should_include(validated.get(name)):
            task[name] = validated[name]

    if spec.operation is Operation.BACKGROUND_REMOVAL:
        settings = build_settings(validated)
        if settings is not None:
            task["settings"] = settings

    return task
