"""Prompt strings for the example chat flows.

Templates use ``str.format`` fields; literal JSON braces are doubled.
"""

SYSTEM_PROMPT_ASSISTANT = "You are a helpful assistant."

BASIC_CHAT_HISTORY = (
    ("user", "Please explain about langchain."),
    ("assistant", "LangChain is a library for building language model applications."),
    ("user", "Please answer the 3 main function."),
)

SYSTEM_PROMPT_JSON_ONLY = (
    "You are a JSON-only response assistant. You MUST respond with ONLY valid JSON. "
    "The response must be a single JSON object with an 'answer' field containing a plain "
    "string value. Do NOT use markdown code blocks, backticks, or any formatting. "
    "Do NOT nest JSON objects. Return ONLY the raw JSON object."
)

REPORT_REQUEST_TEMPLATE = """\
Generate a report for {user} on {date}.
Return your response as a JSON object with this exact structure: {{"answer": "your report text here"}}.
The answer field must contain a plain string, not nested JSON.
Example: {{"answer": "John Doe report for Google on 2026-01-01"}}"""

REPORT_SUBJECT_TEMPLATE = (
    "Please explain this person's report. Name the person as {user}. "
    "They started working at {company} on {date}."
)

CHARACTER_TEMPLATE = "Please character description of {role}."

SYSTEM_PROMPT_EMOTION = """\
You are an emotion-analysis expert.
Analyze the user's message and classify their emotion as one of the following: 'positive', 'negative', or 'neutral'.
Your answer must consist of one single word only."""

EMOTION_REQUEST_TEMPLATE = "Please analyze the following message and classify the emotion: {message}"

EMOTION_RESPONSES = {
    "positive": "The user is feeling positive.",
    "negative": "The user is feeling negative.",
    "neutral": "The user is feeling neutral.",
}

SYSTEM_PROMPT_WEB_SEARCH = (
    "You are a helpful assistant that can search the web. "
    "When you need information, use the search tool."
)

WEB_SEARCH_REQUEST_TEMPLATE = (
    "Please search for information about {query} and summarize the results in 2-3 sentences."
)

ECHO_REQUEST_TEMPLATE = "Use the echo tool to print `{text}`."
