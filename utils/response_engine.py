"""
Scripted career coach replies.

Maps free text to one of six fixed advice blocks by case-insensitive keyword
matching. Rules are checked in order and the first match wins.
"""
from typing import List, Optional, Tuple

CAREER_TRANSITION_ADVICE = (
    "Career transitions can be exciting! Here are some key steps: "
    "1) Identify transferable skills from your current role, "
    "2) Research the target industry and role requirements, "
    "3) Network with professionals in your desired field, "
    "4) Consider additional certifications or training if needed, "
    "5) Update your resume to highlight relevant experience. "
    "What specific field are you interested in transitioning to?"
)

RESUME_ADVICE = (
    "A strong resume should: "
    "1) Start with a compelling summary highlighting your key strengths, "
    "2) Use action verbs and quantify achievements, "
    "3) Tailor content to each job application, "
    "4) Keep it concise (1-2 pages), "
    "5) Include relevant keywords from the job description. "
    "Would you like help with a specific section of your resume?"
)

INTERVIEW_ADVICE = (
    "Interview preparation is crucial! Here are my tips: "
    "1) Research the company thoroughly, "
    "2) Practice common interview questions, "
    "3) Prepare specific examples using the STAR method, "
    "4) Dress appropriately, "
    "5) Prepare thoughtful questions for the interviewer. "
    "Would you like to practice some interview questions?"
)

SKILL_DEVELOPMENT_ADVICE = (
    "Continuous learning is key to career growth! Consider: "
    "1) Identifying in-demand skills in your field, "
    "2) Taking online courses (Coursera, Udemy, LinkedIn Learning), "
    "3) Working on practical projects, "
    "4) Seeking mentorship, "
    "5) Attending industry events and webinars. "
    "What specific skills are you looking to develop?"
)

NEGOTIATION_ADVICE = (
    "Salary negotiation tips: "
    "1) Research market rates for your role and location, "
    "2) Know your worth and be confident, "
    "3) Consider the entire compensation package, "
    "4) Wait for the offer before discussing numbers, "
    "5) Practice your negotiation conversation. "
    "Would you like help preparing for a salary negotiation?"
)

GENERAL_ADVICE = (
    "That's a great question! Career development is a journey that requires "
    "planning and continuous improvement. I recommend: "
    "1) Setting clear short-term and long-term goals, "
    "2) Building a strong professional network, "
    "3) Staying updated with industry trends, "
    "4) Seeking feedback regularly, "
    "5) Maintaining work-life balance. "
    "Could you tell me more about your specific situation so I can provide more targeted advice?"
)

# Order matters: earlier rules win when several keywords appear
RESPONSE_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (('career change', 'transition'), CAREER_TRANSITION_ADVICE),
    (('resume', 'cv'), RESUME_ADVICE),
    (('interview',), INTERVIEW_ADVICE),
    (('skill', 'learning'), SKILL_DEVELOPMENT_ADVICE),
    (('salary', 'negotiation'), NEGOTIATION_ADVICE),
]


def generate_response(query: Optional[str]) -> str:
    """
    Pick the advice block for a user query.

    Args:
        query (str): Free text typed by the user; None counts as empty

    Returns:
        str: The first matching advice block, or the general advice
    """
    lower_query = (query or "").lower()

    for keywords, response in RESPONSE_RULES:
        if any(keyword in lower_query for keyword in keywords):
            return response

    return GENERAL_ADVICE
