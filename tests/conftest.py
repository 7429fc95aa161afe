import pytest

from prompt_builder import config
from prompt_builder.models import ProjectData

SECTION_BODY = "Lorem ipsum dolor sit amet. " * 71

SECTIONED_DOCUMENT = "\n\n".join(f"## Section {i}\n{SECTION_BODY}" for i in range(10))

IDEA_DATA = {
    "featureName": "Daily",
    "appType": "journaling app",
    "journeys": [{"name": "Write Entry"}],
}

PRODUCT_DATA = {
    "featureName": "Smart Checkout",
    "productCompany": "Acme Retail",
    "problem": "Shoppers abandon carts at payment. A one-page checkout removes the friction.",
    "targetUsers": "Returning mobile shoppers, weekly, on the go.",
    "designPrinciple": "Speed over completeness",
    "criticalChallenge": "Saved cards that have expired",
    "journeys": [
        {
            "name": "Express Pay",
            "when": "At cart review",
            "trigger": "Tap checkout",
            "mustCommunicate": "Total and delivery date",
            "ctas": "Pay now vs edit cart",
            "tone": "Reassuring",
            "supportingElements": "Card logos",
        }
    ],
    "supportingScreens": ["Order confirmation", "  "],
    "platform": "mobile",
    "designSystem": "shadcn/ui",
    "layoutConstraints": "Single column",
}


class FakeGenerator:
    """Stands in for the chat-completion client and records what it was sent."""

    def __init__(self, reply: str):
        self.reply = reply
        self.calls: list[dict] = []

    async def generate(self, messages, *, temperature, max_tokens, json_mode=False):
        self.calls.append(
            {"messages": messages, "temperature": temperature, "max_tokens": max_tokens, "json_mode": json_mode}
        )
        return self.reply


@pytest.fixture(autouse=True)
def fresh_config():
    config.get_config.cache_clear()
    yield
    config.get_config.cache_clear()


@pytest.fixture
def idea_data():
    return ProjectData.model_validate(IDEA_DATA)


@pytest.fixture
def product_data():
    return ProjectData.model_validate(PRODUCT_DATA)


@pytest.fixture
def empty_data():
    return ProjectData()


@pytest.fixture
def sectioned_document():
    return SECTIONED_DOCUMENT


@pytest.fixture
def make_generator():
    return FakeGenerator
