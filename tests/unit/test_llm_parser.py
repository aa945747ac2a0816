"""
Tests for resume_insight.ml.nlp.llm_parser — LLMResumeParser.
"""

import json
from datetime import date

import pytest

from resume_insight.core.exceptions import ConfigurationError, ParserError
from resume_insight.ml.nlp.llm_parser import SYSTEM_PROMPT, LLMResumeParser, build_prompt
from resume_insight.services.llm_client import LLMClient
from resume_insight.utils.config import LLMSettings
from resume_insight.utils.constants import ParserStrategy

TODAY = date(2025, 1, 1)

RESPONSE = {
    "personalInfo": {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "phone": "+1 555 123 4567",
        "address": "Austin, TX",
        "linkedIn": "https://linkedin.com/in/janedoe",
        "github": None,
        "portfolio": "null",
        "summary": "Backend engineer with 5 years experience.",
    },
    "experience": [
        {
            "company": "Acme",
            "position": "Engineer",
            "duration": "Jan 2020 - Dec 2021",
            "description": "- Built APIs\n- Led migration",
            "technologies": ["Python"],
        },
        {"company": "", "position": ""},
    ],
    "education": [{"institution": "MIT", "degree": "Bachelor of Science", "year": "2015-2019"}],
    "skills": {
        "other": ["Communication"],
        "programming": ["Python", "Go"],
        "cloud": ["AWS"],
        "technical": ["REST", "Python"],
    },
    "projects": [
        {"name": "Insight", "description": ["Search service"], "url": "https://insight.dev"},
        {"name": None},
    ],
    "certifications": [{"name": "AWS Certified Developer", "issuer": "AWS", "credentialId": "ABC-1"}],
    "languages": [{"language": "English", "proficiency": "Native"}],
    "achievements": [{"title": "Hackathon winner"}],
    "metadata": {"totalExperienceYears": 9, "currentRole": "Engineer"},
}


@pytest.fixture
def parse(make_llm_client):
    def _parse(response):
        client = make_llm_client(response)
        return LLMResumeParser(client=client, today=lambda: TODAY).parse("resume text"), client

    return _parse


class TestLLMResumeParser:
    def test_request_carries_text_and_schema(self, parse):
        _, client = parse(json.dumps(RESPONSE))
        call = client.calls[0]
        assert call["system_prompt"] == SYSTEM_PROMPT
        assert "resume text" in call["prompt"]
        assert '"personalInfo"' in call["prompt"]
        assert call["prompt"] == build_prompt("resume text")

    def test_mapping(self, parse):
        profile, _ = parse(json.dumps(RESPONSE))
        assert profile.identity.full_name == "Jane Doe"
        assert profile.links.linkedin == "https://linkedin.com/in/janedoe"
        assert profile.links.github is None
        assert profile.links.portfolio is None
        assert len(profile.experience) == 1
        assert profile.experience[0].responsibilities == ["Built APIs", "Led migration"]
        assert profile.projects[0].live_link == "https://insight.dev"
        assert len(profile.projects) == 1
        assert profile.education[0].institution == "MIT"
        assert profile.certifications[0].credential_id == "ABC-1"
        assert profile.languages[0].proficiency == "Native"
        assert profile.achievements[0].title == "Hackathon winner"
        assert profile.strategy == ParserStrategy.LLM.value
        assert profile.raw_text == "resume text"
        assert profile.raw_llm_response == RESPONSE

    def test_skill_categories_in_fixed_order(self, parse):
        profile, _ = parse(json.dumps(RESPONSE))
        assert list(profile.skills.categories) == ["technical", "programming", "cloud", "other"]
        assert profile.skills.all == ["REST", "Python", "Go", "AWS", "Communication"]

    def test_years_computed_from_durations(self, parse):
        profile, _ = parse(json.dumps(RESPONSE))
        assert profile.metadata.total_experience_years == 1.9

    def test_years_fall_back_to_reported_value(self, parse):
        data = {**RESPONSE, "experience": [], "metadata": {"totalExperienceYears": "4+"}}
        profile, _ = parse(json.dumps(data))
        assert profile.metadata.total_experience_years == 4.0

    def test_fenced_response_parsed_identically(self, parse):
        plain, _ = parse(json.dumps(RESPONSE))
        fenced, _ = parse(f"```json\n{json.dumps(RESPONSE)}\n```")
        assert fenced == plain

    def test_non_json_response(self, parse):
        with pytest.raises(ParserError):
            parse("Here is the parsed resume: name Jane Doe")

    def test_json_list_response(self, parse):
        with pytest.raises(ParserError):
            parse("[]")

    def test_missing_sections_default_empty(self, parse):
        profile, _ = parse("{}")
        assert profile.experience == []
        assert profile.skills.all == []
        assert profile.identity.full_name is None

    def test_unconfigured_client(self):
        parser = LLMResumeParser(client=LLMClient(settings=LLMSettings(api_key=None)))
        with pytest.raises(ConfigurationError):
            parser.parse("resume text")
