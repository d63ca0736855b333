from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Template

from .model import SECTIONS, entries, group, has_group

RESUME_SYSTEM_PROMPT = (
    "You are a professional resume writer with expertise in creating compelling and effective resumes. "
    "Your task is to enhance the provided resume summary to be more professional, impactful, and tailored "
    "to the individual's experience and skills. Be specific and highlight key achievements."
)

COVER_LETTER_SYSTEM_PROMPT = (
    "You are a professional cover letter writer with expertise in creating compelling job application letters. "
    "Your task is to create or enhance a cover letter that effectively showcases the applicant's experience, "
    "skills, and motivation for the position."
)

RESUME_PROMPT = Template(
    """
Please enhance the following resume to make it more professional and impactful.

About the person:
{% if person.name %}
Name: {{ person.name }}
{% endif %}
{% if person.location %}
Location: {{ person.location }}
{% endif %}
{% if education %}

Education:
{% for edu in education if edu.degree or edu.institution %}
- {{ edu.degree or "" }} from {{ edu.institution or "" }} ({{ edu.date or "No date" }})
{% if edu.description %}
  {{ edu.description }}
{% endif %}
{% endfor %}
{% endif %}
{% if experience %}

Work Experience:
{% for exp in experience if exp.position or exp.company %}
- {{ exp.position or "" }} at {{ exp.company or "" }} ({{ exp.date or "No date" }})
{% if exp.description %}
  {{ exp.description }}
{% endif %}
{% endfor %}
{% endif %}
{% if skills %}

Skills:
{% for skill in skills if skill.category or skill.skills %}
- {{ skill.category or "Skills" }}: {{ skill.skills or "" }}
{% endfor %}
{% endif %}
{% if summary %}

Current Summary:
{{ summary }}

Please enhance the summary to be more professional and highlight key strengths.
{% else %}

Please generate a professional summary based on the information provided above. The summary should be concise (3-5 sentences) and highlight key strengths and qualifications.
{% endif %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
)

COVER_LETTER_PROMPT = Template(
    """
Create a professional cover letter based on the following details:
{% if applicant is not none %}

Applicant Information:
{% if applicant.name %}
Name: {{ applicant.name }}
{% endif %}
{% if applicant.location %}
Location: {{ applicant.location }}
{% endif %}
{% endif %}
{% if recipient is not none %}

Recipient Information:
{% if recipient.name %}
Name: {{ recipient.name }}
{% endif %}
{% if recipient.title %}
Title: {{ recipient.title }}
{% endif %}
{% if recipient.company %}
Company: {{ recipient.company }}
{% endif %}
{% endif %}
{% if job is not none %}

Job Information:
{% if job.title %}
Position: {{ job.title }}
{% endif %}
{% if job.reference %}
Reference: {{ job.reference }}
{% endif %}
{% endif %}
{% for label, text in existing %}

Existing {{ label }} Section:
{{ text }}
{% endfor %}

Please format the response with four clearly labeled sections:
1) Experience: Highlight relevant work experience and accomplishments
2) Skills: Emphasize key skills relevant to the position
3) Motivation: Explain why the applicant is interested in the position and company
4) Closing: A professional closing statement

Each section should be 1-3 paragraphs. Keep the tone professional yet personable.
""",
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_resume_prompt(record: Mapping[str, Any]) -> str:
    return RESUME_PROMPT.render(
        person=group(record, "personalInfo"),
        education=entries(record, "education"),
        experience=entries(record, "experience"),
        skills=entries(record, "skills"),
        summary=record.get("summary"),
    ).strip()


def render_cover_letter_prompt(record: Mapping[str, Any]) -> str:
    existing = [(name, record[name.lower()]) for name in SECTIONS if record.get(name.lower())]
    return COVER_LETTER_PROMPT.render(
        applicant=group(record, "personalInfo") if has_group(record, "personalInfo") else None,
        recipient=group(record, "recipientInfo") if has_group(record, "recipientInfo") else None,
        job=group(record, "jobInfo") if has_group(record, "jobInfo") else None,
        existing=existing,
    ).strip()
