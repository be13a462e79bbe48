"""Tests for signboard.models record validation."""

import pytest
from pydantic import ValidationError

from signboard.models import (
    AWARD_ORGANIZATION,
    AWARD_POSITION,
    AWARD_STUDENT,
    EVENT_CONTENT_TYPE,
    EVENT_MEDIA,
    NEWS_CATEGORY,
    NEWS_HEADLINE,
    NEWS_IMPACT,
    AwardRecord,
    EventRecord,
    NewsRecord,
    PromoRecord,
)

pytestmark = pytest.mark.unit


class TestNewsRecord:
    def test_model_validate_when_sheet_row_then_aliases_mapped(self):
        record = NewsRecord.model_validate(
            {
                NEWS_HEADLINE: "Robotics lab opens",
                NEWS_CATEGORY: "Infrastructure",
                NEWS_IMPACT: "",
                "Unrelated Column": "ignored",
            }
        )
        assert record.headline == "Robotics lab opens"
        assert record.category == "Infrastructure"
        assert record.students_impact is None

    def test_model_validate_when_headline_missing_then_error(self):
        with pytest.raises(ValidationError):
            NewsRecord.model_validate({NEWS_CATEGORY: "Sports"})

    def test_record_when_built_then_immutable(self):
        record = NewsRecord(headline="Story")
        with pytest.raises(ValidationError):
            record.headline = "Changed"


class TestAwardRecord:
    def test_model_validate_when_numeric_year_then_text(self):
        record = AwardRecord.model_validate(
            {
                AWARD_STUDENT: "Meera",
                "year": 2,
                AWARD_POSITION: "Winner",
                AWARD_ORGANIZATION: "IIT Delhi",
            }
        )
        assert record.year == "2"
        assert record.position == "Winner"
        assert record.organization == "IIT Delhi"


class TestEventRecord:
    @pytest.mark.parametrize(
        "content_type,is_video",
        [("Short Video", True), ("Clip", True), ("Poster Image", False), (None, False)],
    )
    def test_is_video_when_content_type_given_then_detected(self, content_type, is_video):
        record = EventRecord.model_validate(
            {EVENT_MEDIA: "https://x.test/a", EVENT_CONTENT_TYPE: content_type}
        )
        assert record.is_video is is_video

    def test_model_validate_when_media_url_padded_then_stripped(self):
        record = EventRecord.model_validate({EVENT_MEDIA: "  https://x.test/a  "})
        assert record.media_url == "https://x.test/a"


class TestPromoRecord:
    def test_init_when_eligibility_list_then_tuple(self):
        promo = PromoRecord(company="Acme", role="Intern", eligibility=["CGPA 7"])
        assert promo.eligibility == ("CGPA 7",)


class TestNumericCells:
    def test_model_validate_when_numeric_headline_then_text(self):
        record = NewsRecord.model_validate({NEWS_HEADLINE: 2025})
        assert record.headline == "2025"

    def test_model_validate_when_numeric_student_name_then_text(self):
        record = AwardRecord.model_validate({AWARD_STUDENT: 42})
        assert record.student_name == "42"

    def test_model_validate_when_boolean_headline_then_rejected(self):
        with pytest.raises(ValidationError):
            NewsRecord.model_validate({NEWS_HEADLINE: True})
