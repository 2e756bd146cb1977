"""
Tests for submission validation helpers.
"""

import pytest

from portfolio.errors import ValidationError
from portfolio.schemas.common import DeleteForm
from portfolio.schemas.experiences import ExperienceForm
from portfolio.schemas.posts import PostForm
from portfolio.schemas.profile import SocialMediaForm
from portfolio.validation import validate_submission


class TestValidateSubmission:
    """validate_submission collects every field error at once."""

    def test_every_offending_field_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(
                ExperienceForm,
                {"id": "-3", "title": "", "start_date": "never", "end_date": "nope"},
            )
        errors = exc_info.value.errors
        assert set(errors) == {"id", "title", "company", "start_date", "end_date", "description"}
        assert all(isinstance(message, str) and message for message in errors.values())

    def test_error_message_names_the_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(PostForm, {})
        assert exc_info.value.message == "Invalid fields: content, title"
        assert exc_info.value.http_status == 422

    def test_valid_submission_returns_model(self):
        form = validate_submission(PostForm, {"id": "", "title": " Hi ", "content": "x", "publish": "on"})
        assert form.id is None
        assert form.title == "Hi"
        assert form.status == "published"

    @pytest.mark.parametrize("raw", ["0", "-1", "abc", ""])
    def test_delete_form_needs_a_positive_id(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(DeleteForm, {"id": raw})
        assert set(exc_info.value.errors) == {"id"}

    def test_date_only_input_becomes_utc(self):
        form = validate_submission(
            ExperienceForm,
            {
                "title": "Engineer",
                "company": "Acme",
                "start_date": "2023-05-01",
                "end_date": "",
                "description": "x",
            },
        )
        assert form.start_date.tzinfo is not None
        assert form.start_date.utcoffset().total_seconds() == 0
        assert form.end_date is None
        assert form.company_url is None

    @pytest.mark.parametrize("url", ["https://x.com", "https://github.com/ada/", "http://example.com/a?b=c"])
    def test_link_url_kept_as_submitted(self, url):
        form = validate_submission(SocialMediaForm, {"platform": "github", "url": url})
        assert form.url == url

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com", ""])
    def test_link_url_must_be_http(self, url):
        with pytest.raises(ValidationError) as exc_info:
            validate_submission(SocialMediaForm, {"platform": "github", "url": url})
        assert set(exc_info.value.errors) == {"url"}
