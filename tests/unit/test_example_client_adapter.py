import json

from case_ingestion.llm.example_client_adapter import ExampleClientAdapter


class TestExampleClientAdapter:
    def test_chat_returns_valid_analysis_json(self) -> None:
        adapter = ExampleClientAdapter()
        content = adapter.create_chat_completion(
            model="m",
            system_prompt="system",
            user_prompt="user",
            temperature=0.2,
            max_tokens=100,
        )
        parsed = json.loads(content)
        assert set(parsed) >= {"summary", "dates", "amounts", "references", "events"}

    def test_vision_returns_non_empty_text(self) -> None:
        adapter = ExampleClientAdapter()
        text = adapter.create_vision_completion(
            model="m",
            prompt="p",
            image_data_uri="data:image/png;base64,AAAA",
            temperature=0.1,
            max_tokens=10,
        )
        assert text

    def test_embedding_has_requested_dimensions(self) -> None:
        adapter = ExampleClientAdapter()
        assert len(adapter.create_embedding(model="e", text="hi", dimensions=12)) == 12

    def test_embedding_defaults_to_eight_dimensions(self) -> None:
        adapter = ExampleClientAdapter()
        assert len(adapter.create_embedding(model="e", text="hi")) == 8

    def test_embedding_is_deterministic(self) -> None:
        adapter = ExampleClientAdapter()
        first = adapter.create_embedding(model="e", text="same text")
        second = adapter.create_embedding(model="e", text="same text")
        assert first == second
        assert first != adapter.create_embedding(model="e", text="other text")
