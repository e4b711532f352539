from backend.config import Settings
from backend.db import InMemoryMessageStore

ADMIN_PASSWORD = "s3cret"


def make_settings(**overrides) -> Settings:
    values = {
        "gemini_api_key": "test-key",
        "database_url": "sqlite+pysqlite:///:memory:",
        "admin_password": ADMIN_PASSWORD,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeAiClient:
    def __init__(self, text="generated", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text


class BrokenStore(InMemoryMessageStore):
    def save_message(self, record):
        raise RuntimeError("connection refused by db-host:5432")

    def list_messages(self):
        raise RuntimeError("connection refused by db-host:5432")
