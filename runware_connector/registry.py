"""Operation schema registry — hardcoded field constraints per operation.

The only place where field legality is defined. The validator, the request
builder and the HTTP surface all read these tables.
"""

from __future__ import annotations

from runware_connector.constraints import (
    ArrayField,
    BooleanField,
    EnumField,
    NumberField,
    Operation,
    OperationSpec,
    StringField,
)

REMBG_MODEL = "runware:109@1"

BACKGROUND_REMOVAL_MODELS: tuple[str, ...] = (
    REMBG_MODEL,         # RemBG 1.4
    "runware:110@1",     # Bria RMBG 2.0
    "runware:112@1",     # BiRefNet v1 Base
    "runware:112@2",     # BiRefNet v1 Base - COD
    "runware:112@3",     # BiRefNet Dis
    "runware:112@5",     # BiRefNet General
    "runware:112@6",     # BiRefNet General Resolution 512x512 FP16
    "runware:112@7",     # BiRefNet HRSOD DHU
    "runware:112@8",     # BiRefNet Massive TR DIS5K TR TES
    "runware:112@9",     # BiRefNet Matting
    "runware:112@10",    # BiRefNet Portrait
)

SEED_MAX = 9223372036854776000

# An image reference is accepted if ANY of these match. The bare base64
# alternative accepts nearly any alphanumeric string.
IMAGE_REFERENCE_PATTERNS: tuple[str, ...] = (
    r"(?i)^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z",
    r"(?i)^data:image/(png|jpg|jpeg|webp);base64,",
    r"^[A-Za-z0-9+/=]+\Z",
    r"(?i)^https?://\S+\.(png|jpg|jpeg|webp)(\?\S*)?\Z",
)


# ---------------------------------------------------------------------------
# Shared field shapes
# ---------------------------------------------------------------------------


def _image_dimension(description: str) -> NumberField:
    return NumberField(
        required=True,
        minimum=128,
        maximum=2048,
        divisible_by=64,
        default=1024,
        description=description,
    )


def _image_prompt(required: bool, description: str) -> StringField:
    return StringField(
        required=required, min_length=2, max_length=3000, description=description
    )


def _image_reference(description: str) -> StringField:
    return StringField(
        required=True,
        min_length=1,
        patterns=IMAGE_REFERENCE_PATTERNS,
        pattern_message="Image must be a valid UUID v4, data URI, base64 string, or public URL",
        description=description,
    )


def _model_air(description: str) -> StringField:
    return StringField(required=True, min_length=1, description=description)


def _alpha_matting_threshold(default: int, description: str) -> NumberField:
    return NumberField(minimum=1, maximum=255, default=default, description=description)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


OPERATION_SPECS: dict[Operation, OperationSpec] = {
    Operation.TEXT_TO_IMAGE: OperationSpec(
        operation=Operation.TEXT_TO_IMAGE,
        fields={
            "positivePrompt": _image_prompt(True, "Description of the image to generate"),
            "negativePrompt": _image_prompt(False, "What to avoid in the image"),
            "model": _model_air("AIR identifier of the model, e.g. 'runware:101@1'"),
            "height": _image_dimension("Image height in pixels"),
            "width": _image_dimension("Image width in pixels"),
            "steps": NumberField(minimum=1, maximum=100, default=20),
            "CFGScale": NumberField(minimum=0, maximum=50, default=7),
            "scheduler": StringField(min_length=1),
            "seed": NumberField(minimum=1, maximum=SEED_MAX),
            "vae": StringField(min_length=1, description="AIR identifier of a VAE override"),
            "clipSkip": NumberField(minimum=0, maximum=2),
        },
    ),
    Operation.IMAGE_TO_IMAGE: OperationSpec(
        operation=Operation.IMAGE_TO_IMAGE,
        fields={
            "seedImage": _image_reference("Starting image for the transformation"),
            "strength": NumberField(
                required=True,
                minimum=0,
                maximum=1,
                default=0.8,
                description="Influence of the seed image",
            ),
            "positivePrompt": _image_prompt(True, "Transformation to apply"),
            "height": _image_dimension("Output height in pixels"),
            "width": _image_dimension("Output width in pixels"),
            "model": _model_air("AIR identifier of the model"),
            "steps": NumberField(minimum=1, maximum=100),
            "negativePrompt": _image_prompt(False, "What to avoid in the output"),
            "CFGScale": NumberField(minimum=0, maximum=50),
            "scheduler": StringField(min_length=1),
        },
    ),
    Operation.TEXT_TO_VIDEO: OperationSpec(
        operation=Operation.TEXT_TO_VIDEO,
        fields={
            "outputType": EnumField(allowed_values=("URL",), default="URL"),
            "outputFormat": EnumField(allowed_values=("MP4", "WEBM"), default="MP4"),
            "outputQuality": NumberField(minimum=1, maximum=100, default=95),
            "webhookURL": StringField(format="url"),
            "uploadEndpoint": StringField(format="url"),
            "includeCost": BooleanField(default=False),
            "positivePrompt": StringField(required=True, min_length=1),
            "negativePrompt": StringField(),
            "width": NumberField(exclusive_minimum=0, divisible_by=8),
            "height": NumberField(exclusive_minimum=0, divisible_by=8),
            "model": _model_air("AIR identifier of the video model, e.g. 'klingai:5@3'"),
            "duration": NumberField(
                required=True, minimum=1, maximum=10, description="Length in seconds"
            ),
            "fps": NumberField(exclusive_minimum=0, default=24),
            "steps": NumberField(minimum=10, maximum=50),
            "seed": NumberField(),
            "CFGScale": NumberField(exclusive_minimum=0),
            "numberResults": NumberField(minimum=1, maximum=4, default=1),
        },
    ),
    Operation.BACKGROUND_REMOVAL: OperationSpec(
        operation=Operation.BACKGROUND_REMOVAL,
        fields={
            "inputImage": _image_reference("Image to process"),
            "model": EnumField(
                required=True,
                allowed_values=BACKGROUND_REMOVAL_MODELS,
                default=REMBG_MODEL,
            ),
            "outputType": EnumField(
                allowed_values=("URL", "base64Data", "dataURI"), default="URL"
            ),
            "outputFormat": EnumField(allowed_values=("PNG", "JPG", "WEBP"), default="PNG"),
            "outputQuality": NumberField(minimum=20, maximum=99, default=95),
            "uploadEndpoint": StringField(format="url"),
            "includeCost": BooleanField(default=False),
            "rgba": ArrayField(
                length=4,
                items=(
                    NumberField(minimum=0, maximum=255),
                    NumberField(minimum=0, maximum=255),
                    NumberField(minimum=0, maximum=255),
                    NumberField(minimum=0, maximum=1),
                ),
                description="[red, green, blue, alpha] of the removed background",
            ),
            "postProcessMask": BooleanField(default=False),
            "returnOnlyMask": BooleanField(default=False),
            "alphaMatting": BooleanField(default=False),
            "alphaMattingForegroundThreshold": _alpha_matting_threshold(
                240, "Foreground threshold (RemBG 1.4 only)"
            ),
            "alphaMattingBackgroundThreshold": _alpha_matting_threshold(
                10, "Background threshold (RemBG 1.4 only)"
            ),
            "alphaMattingErodeSize": _alpha_matting_threshold(
                10, "Erosion size for edge smoothing (RemBG 1.4 only)"
            ),
        },
    ),
}


def get_operation_spec(operation: Operation | str) -> OperationSpec:
    """Look up an operation's schema. Raises ValueError if not found."""
    try:
        return OPERATION_SPECS[Operation(operation)]
    except ValueError:
        raise ValueError(
            f"Unknown operation '{operation}'. "
            f"Available operations: {[op.value for op in OPERATION_SPECS]}"
        ) from None
