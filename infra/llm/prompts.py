CV_SUMMARY_PROMPT = """
You are preparing a candidate's CV for an automated job-match review.

Condense the CV below into a structured summary. Keep only information that is useful
for matching against a job description:
- Current or most recent role and total years of experience
- Technical skills, tools, frameworks and languages (as a comma-separated list)
- Soft skills explicitly mentioned
- Work experience: role, company, dates, 1-2 key achievements each
- Education and certifications
- Notable projects and the technologies they used

Rules:
- Do NOT include names, emails, phone numbers, addresses or any other personal contact details.
- Do NOT invent skills or experience that the CV does not mention.
- Plain text only, short lines, no commentary.

CV:
{cv_text}
"""


MATCH_PROMPT = """
You are an expert ATS (Applicant Tracking System) analyst. Compare the candidate's CV
with the Job Description and evaluate how well they match.

Evaluation rules:
- Extract the important keywords (skills, tools, technologies, qualifications) from the Job Description.
- A keyword is matched only if the CV clearly shows it. Do NOT infer skills that are not stated.
- match_percentage reflects overall fit, weighting required skills above nice-to-have ones.
- Suggestions must be concrete and actionable (what to add or rephrase, and where).
- Strengths must be supported by the CV content.

{cv_label}:
{cv_text}

Job Description:
{job_description}

Return ONLY strict JSON, no markdown fences and no prose:
{{
  "match_percentage": <integer between 0 and 100>,
  "matched_keywords": ["<keyword found in both>", ...],
  "missing_keywords": ["<JD keyword absent from the CV>", ...],
  "suggestions": ["<3-6 improvement suggestions>", ...],
  "strengths": ["<2-4 strengths of the CV for this role>", ...],
  "jd_keywords_count": <integer, total important keywords in the Job Description>
}}
"""
