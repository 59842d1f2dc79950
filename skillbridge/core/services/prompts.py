"""Prompt templates for the coaching endpoints.

Kept short to save tokens: one line of context plus the expected JSON shape.
"""

from typing import List, Optional

from skillbridge.domain.models.common import PromptText

RESUME_EXCERPT_CHARS = 500
JOB_DESCRIPTION_EXCERPT_CHARS = 200


def skills_gap(current_skills: List[str], target_role: str, experience: str, industry: str) -> PromptText:
    return PromptText(
        f"Skills gap analysis for {target_role} ({experience}, {industry}):\n"
        f"Current: {', '.join(current_skills)}\n\n"
        "JSON format:\n"
        '{"gapAnalysis":{"missingSkills":[],"skillsToImprove":[],"strongSkills":[]},'
        '"recommendations":[{"skill":"","priority":"","timeToLearn":"","resources":[{"title":"","type":"","url":""}]}],'
        '"careerPath":{"nextSteps":[],"timelineMonths":0,"salaryProjection":""}}'
    )


def interview_questions(role: str, experience: str, industry: str, difficulty: str) -> PromptText:
    return PromptText(
        f"Generate 8 {difficulty} interview questions for a {experience} {role} in {industry}:\n"
        '{"questions":[{"id":1,"question":"","type":"","category":"","difficulty":"",'
        '"expectedPoints":[],"followUpQuestions":[]}],"tips":[],"estimatedDuration":""}'
    )


def answer_evaluation(question: str, answer: str, role: str) -> PromptText:
    return PromptText(
        f"Evaluate interview answer for {role}:\n"
        f"Q: {question}\n"
        f"A: {answer}\n\n"
        'JSON: {"score":0,"evaluation":{"strengths":[],"weaknesses":[],"improvements":[]},"interviewerResponse":""}'
    )


def resume_optimization(resume_text: str, target_role: str, job_description: Optional[str]) -> PromptText:
    job_excerpt = job_description[:JOB_DESCRIPTION_EXCERPT_CHARS] if job_description else ""
    return PromptText(
        f"Optimize resume for {target_role}:\n"
        f"{resume_text[:RESUME_EXCERPT_CHARS]}...\n"
        f"{job_excerpt}\n\n"
        'JSON: {"analysis":{"atsScore":0,"strengths":[],"weaknesses":[],"missingKeywords":[]},'
        '"optimizations":[],"actionItems":[],"score":{"overall":0}}'
    )


def career_paths(current_role: str, skills: List[str], interests: List[str], timeframe: str) -> PromptText:
    interest_line = f"Interests: {', '.join(interests)}\n" if interests else ""
    return PromptText(
        f"Career paths for {current_role} with skills: {', '.join(skills)}\n"
        f"{interest_line}"
        f"Timeframe: {timeframe}\n\n"
        'JSON: {"paths":[{"title":"","match":0,"description":"","requiredSkills":[],"timeline":"",'
        '"salaryRange":"","steps":[]}],"skillGaps":{"critical":[],"important":[]},"marketTrends":[]}'
    )
