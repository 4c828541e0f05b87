from __future__ import annotations

from smarttube.domain.entities.content import ChatMessage


SCRIPT_SYSTEM_PROMPT = (
    "You are an expert YouTube scriptwriter who creates engaging, well-structured video scripts. "
    "Your scripts are natural, conversational, and optimized for the specified audience."
)


def _user(content: str) -> list[ChatMessage]:
    return [ChatMessage(role="user", content=content)]


def build_titles_prompt(*, title: str, keywords: str, audience: str) -> list[ChatMessage]:
    return _user(
        "You are an expert SEO copywriter. Generate 5 SEO-optimized YouTube video titles "
        "based on the following info:\n"
        "\n"
        f"Base Title: {title}\n"
        f"Keywords: {keywords}\n"
        f"Target Audience: {audience}\n"
        "\n"
        "Instructions:\n"
        "- Use a click-worthy format (how-to, numbers, curiosity, etc.)\n"
        "- Integrate keywords naturally\n"
        "- Keep titles under 70 characters if possible\n"
        "- Make sure they match the tone/style for the audience\n"
        "\n"
        "Respond with just the list of 5 unique titles."
    )


def build_description_prompt(*, title: str, keywords: str, word_count: int) -> list[ChatMessage]:
    return _user(
        "You are a YouTube SEO expert and content writer. Generate an SEO-optimized YouTube "
        "video description based on the following details:\n"
        "\n"
        f"Video Title: {title}\n"
        f"Keywords: {keywords}\n"
        f"Word Count: {word_count}\n"
        "\n"
        "Instructions:\n"
        "- Use the keywords naturally at least 3-5 times\n"
        "- Keep the tone informative and engaging\n"
        "- Include a strong hook in the first sentence\n"
        "- Add a brief call-to-action near the end\n"
        "- Keep it human-sounding, no robotic phrases\n"
        "- Match the description length to the provided word count\n"
        "\n"
        "Return only the final description."
    )


def build_hashtags_prompt(*, title: str) -> list[ChatMessage]:
    return _user(
        "You are a YouTube SEO expert. Based on the video title below, generate a list of the "
        "most relevant, trending, and high-engagement hashtags for YouTube SEO. "
        "Only return the list of hashtags.\n"
        "\n"
        f"Video Title: {title}\n"
        "\n"
        "Instructions:\n"
        "- Provide 10 to 15 hashtags.\n"
        "- Keep hashtags short and relevant.\n"
        "- Include both general and niche-specific tags.\n"
        "- Do not include explanations or text, just output the hashtags."
    )


def build_keywords_prompt(*, topic: str) -> list[ChatMessage]:
    return _user(
        "Act as a YouTube SEO expert. Based on the following video title, generate 10 to 15 "
        "SEO-optimized keyword suggestions that are relevant and rankable.\n"
        "\n"
        f"Video Title: {topic}\n"
        "\n"
        "Only return the list of keywords."
    )


def build_hooks_prompt(*, topic: str, content_type: str) -> list[ChatMessage]:
    return _user(
        "You are a professional YouTube content strategist. Based on the video title and "
        "content type provided below, generate 2-3 short, high-engagement hook lines to start "
        "the video. Keep it natural and avoid robotic tone.\n"
        "\n"
        f"Video Title: {topic}\n"
        f"Content Type: {content_type}\n"
        "\n"
        "Only return the hooks."
    )


def build_title_comparison_prompt(*, title_a: str, title_b: str) -> list[ChatMessage]:
    return _user(
        "Act like a YouTube growth expert and SEO strategist. Analyze the two video titles below "
        "and determine which one is more effective for YouTube search visibility and "
        "click-through rate. Briefly explain why.\n"
        "\n"
        f"Title A: {title_a}\n"
        f"Title B: {title_b}\n"
        "\n"
        "Return your answer in this format:\n"
        "\n"
        "Best Title: [A or B]\n"
        "Reason: [Explain briefly]"
    )


def build_description_optimizer_prompt(*, current_description: str, keywords: str) -> list[ChatMessage]:
    return _user(
        "You are an expert in YouTube SEO optimization. Based on the current video description "
        "and provided keywords, improve the description to make it more SEO-friendly, natural, "
        "and engaging. Use the keywords at least 3-5 times.\n"
        "\n"
        "Current Description:\n"
        f"{current_description}\n"
        "\n"
        "Keywords:\n"
        f"{keywords}\n"
        "\n"
        "Return the optimized description only."
    )


def build_script_prompt(
    *,
    title: str,
    keywords: str,
    audience: str,
    video_length: str,
    content_type: str,
) -> list[ChatMessage]:
    user_prompt = (
        "Create a complete YouTube script with the following details:\n"
        "\n"
        f"Title: {title}\n"
        f"Keywords: {keywords}\n"
        f"Target Audience: {audience}\n"
        f"Video Length: {video_length} minutes\n"
        f"Content Type: {content_type}\n"
        "\n"
        "Requirements:\n"
        "- Start with a catchy intro that hooks viewers\n"
        "- Include the keywords naturally throughout the script\n"
        "- Match the tone and style to the audience and content type\n"
        "- Structure the script with clear sections\n"
        "- End with a strong call-to-action\n"
        f"- Include timestamps for a {video_length}-minute video\n"
        "\n"
        "Please format the script in a clean, easy-to-read format."
    )
    return [
        ChatMessage(role="system", content=SCRIPT_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_prompt),
    ]


def build_video_ideas_prompt(*, channel_url: str) -> list[ChatMessage]:
    return _user(
        "You are an expert YouTube strategist. Analyze the following YouTube channel based on its "
        "videos, titles, and descriptions. Then, generate 3 to 5 unique, fresh, and engaging "
        "video ideas for this channel.\n"
        "\n"
        f"Channel URL: {channel_url}\n"
        "\n"
        "Instructions:\n"
        "1. First, determine the overall niche and target audience of the channel.\n"
        "2. Evaluate the tone, common themes, and style of content.\n"
        "3. Based on this analysis, provide creative and relevant video ideas that the creator "
        "hasn't done before.\n"
        "\n"
        "Each idea should include:\n"
        "- Video Title\n"
        "- A short 2-3 sentence summary of the video content (what it's about, how it helps or "
        "entertains the audience)\n"
        "\n"
        "Format your output as:\n"
        "\n"
        "---\n"
        "**Video Idea 1**\n"
        "Title: [Title]\n"
        "Summary: [Short summary]\n"
        "\n"
        "**Video Idea 2**\n"
        "Title: [Title]\n"
        "Summary: [Short summary]\n"
        "\n"
        "(And so on up to 5 ideas)"
    )


def is_valid_channel_url(url: str) -> bool:
    return any(marker in url for marker in ("youtube.com/", "youtu.be/", "@", "channel/", "c/"))
