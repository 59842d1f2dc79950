"""Static demo payloads served when the AI endpoint cannot answer.

Each builder returns a fresh dict shaped like the model's JSON for the same
request, lightly personalised from the request parameters.
"""

from typing import Any, Dict, List, Optional

DEMO_NOTE = "This is demo analysis due to API limits. Upgrade for personalized AI analysis."
SAMPLE_QUESTIONS_NOTE = "These are sample questions. Our AI generates role-specific questions when available."

DEFAULT_STRONG_SKILLS = ["HTML5", "CSS3", "Basic JavaScript", "Responsive Design", "Communication Skills"]
DEMO_STRONG_SKILL_LIMIT = 3

_TIMELINE_BY_EXPERIENCE = {"Entry Level": 12, "Mid Level": 8}
_SALARY_BANDS = {
    "Entry Level": ("$60,000 - $80,000", "entry-level"),
    "Mid Level": ("$80,000 - $110,000", "mid-level"),
}
_SENIOR_SALARY_BAND = ("$110,000 - $150,000", "senior-level")


def skills_gap_analysis(
    current_skills: List[str],
    target_role: str,
    experience: str,
    industry: str,
    strong_skill_limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Demo skills gap analysis. `strong_skill_limit` trims the user's own skills list."""
    strong_skills = list(current_skills) if current_skills else list(DEFAULT_STRONG_SKILLS)
    if current_skills and strong_skill_limit is not None:
        strong_skills = strong_skills[:strong_skill_limit]
    salary_band, level = _SALARY_BANDS.get(experience, _SENIOR_SALARY_BAND)

    return {
        "gapAnalysis": {
            "missingSkills": [
                "Advanced React.js",
                "TypeScript",
                "Node.js/Express",
                "Cloud Platforms (AWS/Azure)",
                "System Design",
                "Database Design",
                "API Development",
                "Testing Frameworks",
            ],
            "skillsToImprove": [
                "JavaScript ES6+",
                "Data Structures & Algorithms",
                "Version Control (Git)",
                "Problem Solving",
                "Code Optimization",
            ],
            "strongSkills": strong_skills,
        },
        "recommendations": [
            {
                "skill": "React.js",
                "priority": "High",
                "timeToLearn": "3-4 months",
                "resources": [
                    {
                        "title": "React Official Documentation",
                        "type": "Course",
                        "provider": "React Team",
                        "url": "https://react.dev/learn",
                        "duration": "40 hours",
                        "difficulty": "Intermediate",
                    },
                ],
            },
            {
                "skill": "TypeScript",
                "priority": "High",
                "timeToLearn": "2-3 months",
                "resources": [
                    {
                        "title": "TypeScript Handbook",
                        "type": "Documentation",
                        "provider": "Microsoft",
                        "url": "https://www.typescriptlang.org/docs/",
                        "duration": "30 hours",
                        "difficulty": "Intermediate",
                    },
                ],
            },
            {
                "skill": "System Design",
                "priority": "Medium",
                "timeToLearn": "6-8 months",
                "resources": [
                    {
                        "title": "System Design Interview",
                        "type": "Book",
                        "provider": "Alex Xu",
                        "url": "https://www.amazon.com/System-Design-Interview-insiders-Second/dp/B08CMF2CQF",
                        "duration": "3 months",
                        "difficulty": "Advanced",
                    },
                ],
            },
        ],
        "careerPath": {
            "nextSteps": [
                "Master React.js and build 3-4 portfolio projects",
                "Learn TypeScript and convert existing projects",
                "Gain experience with backend technologies (Node.js)",
                "Study system design principles and scalability",
                "Contribute to open-source projects",
                "Network with professionals in the industry",
                "Prepare for technical interviews",
            ],
            "timelineMonths": _TIMELINE_BY_EXPERIENCE.get(experience, 6),
            "salaryProjection": f"{salary_band} for {level} {target_role} positions in {industry}",
        },
    }


def interview_questions(role: str) -> Dict[str, Any]:
    role_lower = role.lower()
    return {
        "questions": [
            {
                "id": 1,
                "question": "Tell me about yourself and what brings you to this position.",
                "type": "opening",
                "category": "introduction",
                "difficulty": "easy",
                "expectedPoints": [
                    "Professional background summary",
                    "Career motivation",
                    "Relevant experience highlights",
                ],
                "followUpQuestions": ["What specific aspect of this role excites you most?"],
            },
            {
                "id": 2,
                "question": f"What experience do you have with {role_lower} responsibilities?",
                "type": "experience",
                "category": "background",
                "difficulty": "medium",
                "expectedPoints": [
                    "Specific examples from past roles",
                    "Quantifiable achievements",
                    "Relevant skills demonstrated",
                ],
                "followUpQuestions": ["Can you give me a specific example of a challenge you overcame?"],
            },
            {
                "id": 3,
                "question": "Where do you see yourself in 3-5 years?",
                "type": "career",
                "category": "goals",
                "difficulty": "medium",
                "expectedPoints": [
                    "Clear career progression plan",
                    "Alignment with company growth",
                    "Professional development goals",
                ],
                "followUpQuestions": ["How does this role fit into your career plans?"],
            },
            {
                "id": 4,
                "question": "Describe a challenging project you worked on and how you handled it.",
                "type": "behavioral",
                "category": "problem-solving",
                "difficulty": "medium",
                "expectedPoints": [
                    "Clear problem description using STAR method",
                    "Action steps taken",
                    "Measurable results",
                ],
                "followUpQuestions": ["What would you do differently if faced with a similar situation?"],
            },
            {
                "id": 5,
                "question": f"What do you think are the most important skills for a {role}?",
                "type": "technical",
                "category": "expertise",
                "difficulty": "medium",
                "expectedPoints": [
                    "Industry-relevant skills",
                    "Both technical and soft skills",
                    "Understanding of role requirements",
                ],
                "followUpQuestions": ["Which of these skills do you consider your strongest?"],
            },
        ],
        "tips": [
            "Use the STAR method (Situation, Task, Action, Result) for behavioral questions",
            "Be specific with examples and include measurable outcomes when possible",
            "Research the company and role thoroughly before the interview",
            "Prepare thoughtful questions to ask about the role and company",
            "Practice describing technical concepts in simple, clear terms",
        ],
        "estimatedDuration": "45-60 minutes",
    }


def answer_evaluation(role: str) -> Dict[str, Any]:
    return {
        "score": 75,
        "evaluation": {
            "strengths": [
                "Clear and confident communication",
                "Relevant examples from your experience",
                "Good understanding of the role",
            ],
            "weaknesses": [
                "Few quantifiable achievements",
                "Answer structure could be tighter",
            ],
            "improvements": [
                "Use the STAR method for behavioral questions",
                "Provide more quantifiable achievements",
                f"Research common interview questions for {role} roles",
            ],
        },
        "interviewerResponse": "Thank you, that's helpful. Let's move on to the next question.",
    }


def resume_optimization(target_role: str) -> Dict[str, Any]:
    return {
        "analysis": {
            "atsScore": 78,
            "strengths": ["Strong technical skills section", "Clear work experience", "Quantified achievements"],
            "weaknesses": [
                "Missing keywords for target role",
                "Could improve summary section",
                "Limited industry-specific terms",
            ],
            "missingKeywords": ["React", "TypeScript", "Agile", "Cloud Computing"],
        },
        "optimizations": [
            {
                "section": "Professional Summary",
                "current": "Software developer with experience...",
                "improved": f"Results-driven {target_role} with 3+ years of experience delivering scalable solutions...",
                "reasoning": "More specific and quantified, includes key technologies",
            }
        ],
        "actionItems": [
            {
                "priority": "High",
                "action": "Add missing technical keywords to skills section",
                "impact": "Improve ATS compatibility by 15-20%",
            },
            {
                "priority": "Medium",
                "action": "Quantify achievements with specific metrics",
                "impact": "Increase recruiter engagement by 25%",
            },
        ],
        "score": {"overall": 78, "atsCompatibility": 72, "relevance": 85, "formatting": 76},
    }


def career_path_recommendations(current_role: str, skills: List[str], timeframe: str) -> Dict[str, Any]:
    return {
        "paths": [
            {
                "title": f"Senior {current_role}",
                "match": 85,
                "description": f"Deepen expertise and take ownership of larger projects as a senior {current_role}.",
                "requiredSkills": ["System Design", "Mentoring", "Technical Leadership"],
                "timeline": timeframe,
                "salaryRange": "$110,000 - $150,000",
                "steps": [
                    "Lead a cross-team project end to end",
                    "Mentor junior colleagues",
                    "Study system design and architecture",
                ],
            },
            {
                "title": "Technical Lead",
                "match": 70,
                "description": "Guide a team's technical direction while staying hands-on.",
                "requiredSkills": ["Architecture", "Communication", "Project Planning"],
                "timeline": timeframe,
                "salaryRange": "$130,000 - $170,000",
                "steps": [
                    "Own technical decisions for a product area",
                    "Improve planning and estimation skills",
                    "Build relationships with product and design",
                ],
            },
        ],
        "skillGaps": {
            "critical": ["System Design", "Technical Leadership"],
            "important": ["Cloud Architecture", "Stakeholder Communication"],
        },
        "marketTrends": [
            "Growing demand for cloud and AI skills",
            "Remote-friendly roles remain common",
        ],
        "currentSkills": list(skills),
    }
