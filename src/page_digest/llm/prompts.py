# --- Article Summarization ---

def get_summary_prompt(article_text: str) -> str:
    """Creates the completion prompt asking for a five-point article summary.

    Args:
        article_text: The extracted article body.

    Returns:
        A prompt string ending where the model should start writing points.
    """
    return f"""You will be provided with a news article. Create a clear and concise 5-point summary focusing on the key facts and developments.

Article:
{article_text}

Instructions: Write exactly 5 numbered points, each capturing an important fact or development from the article and each point should be under 20 words. Be specific and factual.

Summary:"""
