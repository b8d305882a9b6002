"""Vision model tools."""

from typing import Annotated, Optional

from pydantic import Field

from .base import ToolContext, to_json


DEFAULT_PROMPT = """
Conduct a thorough analysis of the screenshot, with a particular emphasis on the textual content and any included imagery.
Provide a detailed examination of the text, highlighting key points and dissecting technical terms, named entities, and data presentations that contribute to the understanding of the subject matter.
Discuss how the technical language and the named entities relate to the overarching topic and objectives of the webpage.
Also, describe how the visual elements, such as color schemes, imagery, and branding elements like logos and taglines, support the textual message and enhance the viewer's comprehension of the content.
Assess the readability and organization of the content, and evaluate how these aspects facilitate the visitor's navigation and learning experience. Refrain from delving into the specifics of the user interface design but focus on the communication effectiveness and coherence of visual and textual elements.
Finally, offer a comprehensive view of the website's ability to convey its message and fulfill its intended commercial, educational, or promotional role, considering the target audience's perspective and potential engagement with the content.

Carefully examine the image for any text it contains and extract as Markdown text.
In cases where the image contains no extractable text or only text that is not useful for understanding, don't extract any text.
Focus on including text that contributes significantly to understanding the image, such as titles, headings, key phrases, important data points, or labels.
Exclude any text that is not relevant or does not add value to the comprehension of the image.
Ensure to transcribe the text completely, without truncating with ellipses.
"""


def register(ctx: ToolContext) -> None:
    """Register image description tools."""

    @ctx.tool(
        "describeImageUrl",
        """Prompts vision LLM and returns completion.
        Does *not* ingest image into Graphlit knowledge base.
        Accepts image URL as string.
        Returns Markdown text from LLM completion.""",
    )
    async def describe_image_url(
        prompt: Annotated[str, Field(description="Prompt for the vision model.")],
        url: Annotated[str, Field(description="Image URL.")],
    ) -> str:
        async with ctx.client() as client:
            completion = await client.describe_image(prompt, url)
        return to_json({"message": (completion or {}).get("message")})

    @ctx.tool(
        "describeImageContent",
        """Prompts vision LLM and returns description of image content.
        Accepts content identifier as string, and optional prompt for image description.
        Returns Markdown text from LLM completion.""",
    )
    async def describe_image_content(
        id: Annotated[str, Field(description="Content identifier.")],
        prompt: Annotated[Optional[str], Field(description="Prompt for image description, optional.")] = None,
    ) -> str:
        async with ctx.client() as client:
            content = await client.get_content(id)
            image_uri = (content or {}).get("imageUri")
            if image_uri is None:
                return to_json({})

            completion = await client.describe_image(prompt or DEFAULT_PROMPT, image_uri)
        return to_json({"message": (completion or {}).get("message")})
