"""Tests for resume and cover-letter prompt rendering."""

from resumecraft.prompt_templates import render_cover_letter_prompt, render_resume_prompt


class TestResumePrompt:
    def test_full_record_renders_in_order(self, sample_resume):
        prompt = render_resume_prompt(sample_resume)

        assert prompt == (
            "Please enhance the following resume to make it more professional and impactful.\n"
            "\n"
            "About the person:\n"
            "Name: Ada Lovelace\n"
            "Location: London\n"
            "\n"
            "Education:\n"
            "- BSc Mathematics from University of London (1835)\n"
            "\n"
            "Work Experience:\n"
            "- Analyst at Analytical Engine Co (1842-1843)\n"
            "  Wrote the first published algorithm.\n"
            "\n"
            "Skills:\n"
            "- Languages: Go, Python\n"
            "\n"
            "Current Summary:\n"
            "Mathematician.\n"
            "\n"
            "Please enhance the summary to be more professional and highlight key strengths."
        )

    def test_empty_record_asks_for_new_summary(self):
        prompt = render_resume_prompt({})
        assert prompt.startswith("Please enhance the following resume")
        assert "About the person:" in prompt
        assert "Education:" not in prompt
        assert "Work Experience:" not in prompt
        assert "Skills:" not in prompt
        assert prompt.endswith("highlight key strengths and qualifications.")

    def test_missing_fields_use_placeholders(self):
        record = {
            "education": [{"institution": "MIT"}],
            "experience": [{"company": "Acme", "date": None}],
            "skills": [{"skills": "SQL"}],
        }
        prompt = render_resume_prompt(record)
        assert "-  from MIT (No date)" in prompt
        assert "-  at Acme (No date)" in prompt
        assert "- Skills: SQL" in prompt
        assert "None" not in prompt

    def test_entries_without_identifiers_are_skipped(self):
        record = {"education": [{"date": "2020"}, {"degree": "PhD", "institution": "ETH"}]}
        prompt = render_resume_prompt(record)
        assert "2020" not in prompt
        assert "- PhD from ETH (No date)" in prompt

    def test_wrongly_typed_groups_are_treated_as_absent(self):
        record = {"personalInfo": "Ada", "education": "lots", "skills": [None, "x"]}
        prompt = render_resume_prompt(record)
        assert "Name:" not in prompt
        assert "Education:" not in prompt
        assert "Skills:" not in prompt


class TestCoverLetterPrompt:
    def test_full_record_contains_every_group(self, sample_cover_letter):
        prompt = render_cover_letter_prompt(sample_cover_letter)

        assert prompt.startswith("Create a professional cover letter based on the following details:")
        assert "Applicant Information:\nName: Ada Lovelace\nLocation: London" in prompt
        assert (
            "Recipient Information:\nName: Charles Babbage\nTitle: Director\nCompany: Engines Ltd"
            in prompt
        )
        assert "Job Information:\nPosition: Programmer\nReference: REF-42" in prompt
        assert "Existing Experience Section:\nI programmed engines." in prompt
        assert "Existing Closing Section:\nKind regards." in prompt
        assert "Existing Skills Section" not in prompt
        assert prompt.endswith("Keep the tone professional yet personable.")

    def test_groups_appear_in_fixed_order(self, sample_cover_letter):
        prompt = render_cover_letter_prompt(sample_cover_letter)
        order = [
            prompt.index("Applicant Information:"),
            prompt.index("Recipient Information:"),
            prompt.index("Job Information:"),
            prompt.index("Existing Experience Section:"),
            prompt.index("Existing Closing Section:"),
            prompt.index("Please format the response"),
        ]
        assert order == sorted(order)

    def test_empty_record_only_has_instructions(self):
        prompt = render_cover_letter_prompt({})
        assert "Applicant Information:" not in prompt
        assert "Recipient Information:" not in prompt
        assert "Job Information:" not in prompt
        assert "Existing" not in prompt
        assert "1) Experience:" in prompt
        assert "4) Closing:" in prompt

    def test_present_but_empty_group_keeps_its_heading(self):
        prompt = render_cover_letter_prompt({"jobInfo": {}})
        assert "Job Information:\n\nPlease format the response" in prompt
