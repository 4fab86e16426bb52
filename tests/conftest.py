import pytest

from herald.mentions import MentionPolicy


@pytest.fixture(autouse=True)
def reset_mention_defaults():
    yield
    MentionPolicy.set_default_mentions(None)
    MentionPolicy.set_default_mention_replied_user(True)
