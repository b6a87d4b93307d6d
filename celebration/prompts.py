"""Prompt construction for the National Day celebration portrait."""

# Used when the user leaves the outfit description blank.
DEFAULT_OUTFIT_DESCRIPTION = (
    "a traditional Vietnamese Ao Dai in a vibrant red color, "
    "with a large, stylized golden star emblem prominently on the chest"
)

_LIKENESS_INSTRUCTIONS = (
    "A photorealistic image. The person from the uploaded photo is the main subject. "
    "The absolute highest priority is to perfectly preserve the exact face and likeness "
    "of the person from the uploaded photo. Every detail of their facial features "
    "(eyes, nose, mouth, bone structure) as well as their skin tone, and hair color and "
    "style, must be an identical match to the original. The final image must be "
    "unmistakably the same person. Do not alter their face in any way. "
    "The person's body shape should also be preserved."
)

_POSE_INSTRUCTIONS = (
    "The person's pose should be inspiring and patriotic, such as a formal flag salute, "
    "a hand placed solemnly over the heart, or another pose that expresses pride and happiness."
)

_SCENE_INSTRUCTIONS = (
    "The scene celebrates the 80th anniversary of Vietnam's National Day. "
    "The background should be a beautiful and heroic scene featuring the Vietnamese flag. "
    "The atmosphere is joyful and proud. DO NOT generate any text, letters, or numbers in "
    "the image. Focus on pure visual symbolism. The final image should be a high-quality, "
    "vibrant, and lifelike photograph."
)


def build_prompt(outfit_description: str) -> str:
    """
    Return the full instruction sent to the image model.

    A blank (empty or whitespace-only) description is replaced by
    DEFAULT_OUTFIT_DESCRIPTION; anything else is embedded verbatim.
    """
    outfit = outfit_description if outfit_description.strip() else DEFAULT_OUTFIT_DESCRIPTION

    return "\n\n".join([
        _LIKENESS_INSTRUCTIONS,
        f'The person is wearing: "{outfit}".',
        _POSE_INSTRUCTIONS,
        _SCENE_INSTRUCTIONS,
    ])
