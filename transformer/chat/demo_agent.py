"""Canned-response chat agent used as the default ``start_chat`` capability."""

import asyncio
import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

POEM_RESPONSE = """Here's a poem about coding:

```
In lines of code, we build our dreams,
Functions flow like gentle streams.
Objects dance in memory's space,
Each bug we fix with gentle grace.

Through loops and logic, day by day,
We craft our worlds in our own way.
In Python's embrace we find
New patterns of the coding kind.
```

Would you like me to explain any part of the poem?"""

HELLO_RESPONSE = "Hello! I am Transformer, your coding assistant. How can I help you today?"


class DemoChatAgent:
    """A chat agent that only knows how to write poems and say hello."""

    def __init__(self, delay: float = 0.0, responses: Optional[Dict[str, str]] = None):
        """
        Args:
            delay: Simulated thinking time in seconds
            responses: Prompt -> reply table (prompts matched case-insensitively)
        """
        self.delay = delay
        self.responses = responses if responses is not None else {
            "write a poem": POEM_RESPONSE,
            "hello": HELLO_RESPONSE,
        }
        self.history: List[Dict[str, str]] = []

    async def respond(self, prompt: str) -> str:
        """Reply to a prompt, recording the exchange."""
        if self.delay:
            await asyncio.sleep(self.delay)

        response = self.responses.get(prompt.strip().lower())
        if response is None:
            response = (
                f'I understood your request: "{prompt}"\n'
                "I'm a simple demo agent that only knows how to write poems and say hello."
            )

        self.history.append({"prompt": prompt, "response": response})
        logger.debug(f"Chat prompt answered ({len(self.history)} exchanges)")
        return response

    def sample_prompts(self) -> List[str]:
        return list(self.responses.keys())
