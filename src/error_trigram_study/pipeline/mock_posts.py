"""
Purpose: Offline sample of search results for mock mode and tests.
Constraints: Data only.
"""

from typing import Any, Dict, List

MOCK_POSTS: List[Dict[str, Any]] = [
    {
        "question_id": 1001,
        "title": "Error in if statement with NA",
        "tags": ["r"],
        "link": "https://stackoverflow.com/q/1001",
        "body": (
            "<p>My loop stops with</p>\n"
            "<pre><code>Error in if (x &gt; 0) { : missing value where TRUE/FALSE needed\n"
            "</code></pre>\n<p>How do I skip NA values?</p>"
        ),
    },
    {
        "question_id": 1002,
        "title": "object not found when plotting",
        "tags": ["r", "ggplot2"],
        "link": "https://stackoverflow.com/q/1002",
        "body": (
            "<pre><code>ggplot(df, aes(x, y)) + geom_point()\n"
            "Error in FUN(X[[i]], ...) : object 'y' not found\n"
            "</code></pre>"
        ),
    },
    {
        "question_id": 1003,
        "title": "could not find function",
        "tags": ["r"],
        "link": "https://stackoverflow.com/q/1003",
        "body": (
            "<p>Running my script gives:</p>\n"
            "<blockquote>Error in select(., a, b) : could not find function \"select\"</blockquote>\n"
            "<p>and later</p>\n"
            "<pre>Error in mutate(df, z = x + y) : could not find function \"mutate\"\n"
            "In addition: Warning message:\nIn log(-1) : NaNs produced</pre>"
        ),
    },
    {
        "question_id": 1004,
        "title": "non-numeric argument",
        "tags": ["r"],
        "link": "https://stackoverflow.com/q/1004",
        "body": (
            "<p>Error in x + 1 : non-numeric argument to binary operator</p>\n"
            "<p>x came from read.csv.</p>"
        ),
    },
    {
        "question_id": 1005,
        "title": "missing value in while loop",
        "tags": ["r"],
        "link": "https://stackoverflow.com/q/1005",
        "body": (
            "<pre><code>Error in while (i &lt; n) { : missing value where TRUE/FALSE needed\n\n"
            "</code></pre><p>n is computed from a column with NAs.</p>"
        ),
    },
    {
        "question_id": 1006,
        "title": "Question without an error message",
        "tags": ["r"],
        "link": "https://stackoverflow.com/q/1006",
        "body": "<p>Which Error handling style is better, tryCatch or try?</p>",
    },
]
