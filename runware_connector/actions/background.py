"""Background removal action.

Docs: https://runware.ai/docs/en/image-editing/background-removal
Settings (rgba, masks, alpha matting) only apply to RemBG 1.4.
"""

from __future__ import annotations

from runware_connector.actions import Action, register
from runware_connector.constraints import Operation

remove_image_background = register(
    Action(
        name="removeImageBackground",
        display_name="Image Background Removal",
        description="Remove the background from an image.",
        operation=Operation.BACKGROUND_REMOVAL,
        prefilled=frozenset(
            {
                "model",
                "outputType",
                "outputFormat",
                "outputQuality",
                "includeCost",
                "postProcessMask",
                "returnOnlyMask",
                "alphaMatting",
                "alphaMattingForegroundThreshold",
                "alphaMattingBackgroundThreshold",
                "alphaMattingErodeSize",
            }
        ),
    )
)
