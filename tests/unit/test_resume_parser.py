"""
Tests for resume_insight.ml.nlp.resume_parser — HeuristicResumeParser.
"""

from resume_insight.utils.constants import ParserStrategy


class TestJaneDoe:
    def test_identity(self, heuristic_parser, jane_doe_text):
        profile = heuristic_parser.parse(jane_doe_text)
        assert profile.identity.full_name == "Jane Doe"
        assert profile.identity.email == "jane@x.com"
        assert profile.identity.phone == "+1 555 123 4567"
        assert "Backend engineer" in profile.identity.summary

    def test_skills_and_education(self, heuristic_parser, jane_doe_text):
        profile = heuristic_parser.parse(jane_doe_text)
        assert profile.skills.all == ["Python", "Java"]
        assert len(profile.education) == 1
        education = profile.education[0]
        assert education.degree == "Bachelor of Science"
        assert education.institution == "MIT"
        assert education.year == "2015-2019"

    def test_absent_sections(self, heuristic_parser, jane_doe_text):
        profile = heuristic_parser.parse(jane_doe_text)
        assert profile.experience == []
        assert profile.projects == []
        assert profile.metadata.total_experience_years == 0.0
        assert profile.metadata.current_role is None


class TestJohnSmith:
    def test_contact(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert profile.identity.full_name == "John Smith"
        assert profile.identity.email == "john.smith@example.com"
        assert profile.identity.phone == "+1 415 555 0199"
        assert profile.identity.address == "San Francisco, CA"
        assert profile.links.linkedin == "https://linkedin.com/in/johnsmith"
        assert profile.links.github == "https://github.com/jsmith"
        assert profile.links.portfolio == "https://jsmith.dev"

    def test_summary(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert profile.identity.summary == (
            "Backend engineer with 6 years of experience building data platforms."
        )

    def test_skills(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert profile.skills.categories == {
            "Programming": ["Python", "Go", "SQL"],
            "Cloud": ["AWS", "GCP", "Docker", "Kubernetes"],
            "Tools": ["Git", "Linux"],
        }
        assert profile.skills.all == [
            "Python", "Go", "SQL", "AWS", "GCP", "Docker", "Kubernetes", "Git", "Linux",
        ]

    def test_experience(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert [(e.position, e.company, e.duration) for e in profile.experience] == [
            ("Senior Engineer", "Acme Corp", "Jan 2020 – Present"),
            ("Software Engineer", "Beta Labs", "Jun 2017 – Dec 2019"),
        ]
        assert profile.experience[0].responsibilities == [
            "Improved API latency by 40%",
            "Led migration to Kubernetes",
            "Designed the event ingestion service for billing",
        ]
        assert profile.experience[1].responsibilities == ["Built internal tooling"]

    def test_metadata(self, heuristic_parser, john_smith_text):
        metadata = heuristic_parser.parse(john_smith_text).metadata
        assert metadata.total_experience_years == 7.5
        assert metadata.current_role == "Senior Engineer"
        assert metadata.current_company == "Acme Corp"
        assert metadata.location == "San Francisco, CA"

    def test_projects(self, heuristic_parser, john_smith_text):
        project = heuristic_parser.parse(john_smith_text).projects[0]
        assert project.name == "Insight Search"
        assert project.role == "Lead Developer"
        assert project.duration == "Mar 2021 – Jun 2021"
        assert project.technologies == ["Python", "FastAPI", "Redis"]
        assert project.live_link == "https://search.example.com"

    def test_education(self, heuristic_parser, john_smith_text):
        education = heuristic_parser.parse(john_smith_text).education
        assert len(education) == 1
        assert education[0].degree == "Bachelor of Technology in Computer Science"
        assert education[0].institution == "State University"
        assert education[0].year == "2013 - 2017"
        assert education[0].gpa == "8.7"

    def test_highlights(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert [c.name for c in profile.certifications] == ["AWS Certified Solutions Architect 2022"]
        assert profile.certifications[0].issuer == "AWS"
        assert profile.certifications[0].date == "2022"
        assert [a.title for a in profile.achievements] == ["Improved API latency by 40%"]
        assert profile.languages == []

    def test_raw_text_and_strategy(self, heuristic_parser, john_smith_text):
        profile = heuristic_parser.parse(john_smith_text)
        assert profile.raw_text == john_smith_text
        assert profile.strategy == ParserStrategy.HEURISTIC.value


class TestDeterminism:
    def test_same_text_same_profile(self, heuristic_parser, john_smith_text):
        assert heuristic_parser.parse(john_smith_text) == heuristic_parser.parse(john_smith_text)

    def test_empty_text(self, heuristic_parser):
        profile = heuristic_parser.parse("")
        assert profile.identity.full_name is None
        assert profile.skills.all == []
