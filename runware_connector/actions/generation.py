"""Generation actions — text-to-image, image-to-image and text-to-video.

Docs: https://runware.ai/docs/en/image-inference/api-reference
      https://runware.ai/docs/en/video-inference/api-reference
"""

from __future__ import annotations

from runware_connector.actions import Action, register
from runware_connector.constraints import Operation

generate_image_from_text = register(
    Action(
        name="generateImageFromText",
        display_name="Generate Image from Text",
        description="Produce images from a text description.",
        operation=Operation.TEXT_TO_IMAGE,
        prefilled=frozenset({"height", "width", "steps", "CFGScale"}),
    )
)

generate_image_from_image = register(
    Action(
        name="generateImageFromExistingImage",
        display_name="Generate Images from Existing Image",
        description="Generate new images based on a provided image (image-to-image).",
        operation=Operation.IMAGE_TO_IMAGE,
        prefilled=frozenset({"strength", "height", "width"}),
    )
)

# Video inference runs out-of-band: the response only acknowledges the task,
# the video itself is fetched later by taskUUID.
generate_video_from_text = register(
    Action(
        name="generateVideoFromText",
        display_name="Generate Video from Text",
        description=(
            "Generate video from a text prompt. This is an async task; use the "
            "returned task UUID to retrieve the video."
        ),
        operation=Operation.TEXT_TO_VIDEO,
        prefilled=frozenset(
            {"outputType", "outputFormat", "outputQuality", "includeCost", "fps", "numberResults"}
        ),
    )
)
