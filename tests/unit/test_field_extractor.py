from case_ingestion.structured.field_extractor import StructuredFieldExtractor
from case_ingestion.structured.models import StructuredFields

LETTER = (
    "Our ref: BT/2024/12345\n"
    "Dear [PERSON_1],\n"
    "We received your SEIS3 claim for 2023/24 on 15 March 2024. "
    "The investment of £125,000 is under review. "
    "We apologise for the delay in responding. "
    "Payment of 350 GBP was issued on 02/04/2024."
)


class TestStructuredFieldExtractor:
    def test_extracts_dates_in_order(self) -> None:
        fields = StructuredFieldExtractor().extract(LETTER)
        assert fields.dates == ["15 March 2024", "02/04/2024"]

    def test_extracts_amounts(self) -> None:
        fields = StructuredFieldExtractor().extract(LETTER)
        assert fields.amounts == ["£125,000", "350 GBP"]

    def test_extracts_references(self) -> None:
        fields = StructuredFieldExtractor().extract(LETTER)
        assert fields.references[0] == "BT/2024/12345"
        assert "SEIS3" in fields.references
        assert "2023/24" in fields.references

    def test_extracts_event_sentences(self) -> None:
        fields = StructuredFieldExtractor().extract(LETTER)
        assert "We received your SEIS3 claim for 2023/24 on 15 March 2024." in fields.events
        assert "We apologise for the delay in responding." in fields.events
        assert "The investment of £125,000 is under review." not in fields.events

    def test_ignores_anonymization_placeholders(self) -> None:
        fields = StructuredFieldExtractor().extract("Your UTR [UTR_1] was received.")
        assert fields.references == []

    def test_deduplicates_case_insensitively(self) -> None:
        fields = StructuredFieldExtractor().extract("Form SEIS3 and again SEIS3 and CRG4025.")
        assert fields.references == ["SEIS3", "CRG4025"]

    def test_labelled_reference_needs_a_digit(self) -> None:
        fields = StructuredFieldExtractor().extract("Case handled by the DEBTMGMT team.")
        assert fields.references == []

    def test_labelled_reference(self) -> None:
        fields = StructuredFieldExtractor().extract("Reference: CFS-1234567 applies.")
        assert fields.references == ["CFS-1234567"]

    def test_placeholder_text_yields_no_events(self) -> None:
        fields = StructuredFieldExtractor().extract(
            "[Unsupported file type: .zip - stored for manual review]"
        )
        assert fields == StructuredFields()

    def test_long_events_are_truncated(self) -> None:
        sentence = "The claim was submitted " + "and reviewed " * 40 + "."
        fields = StructuredFieldExtractor().extract(sentence)
        assert len(fields.events[0]) == 200


class TestStructuredFields:
    def test_round_trips_through_dict(self) -> None:
        fields = StructuredFields(
            dates=["15 March 2024"],
            amounts=["£125,000"],
            references=["BT/2024/12345"],
            events=["Claim submitted."],
        )
        assert StructuredFields.from_dict(fields.to_dict()) == fields

    def test_from_dict_tolerates_missing_keys(self) -> None:
        assert StructuredFields.from_dict({"dates": None}) == StructuredFields()
