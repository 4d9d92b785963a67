"""
Built-in EU AI Act training modules.

These six modules are seeded by ``compliance_ai.scripts.seed_training_modules``
and served directly when the ``training_modules`` table is still empty.
"""

from __future__ import annotations

from typing import Any, Dict, List

from compliance_ai.core.database.entities import TrainingModule

BUILTIN_MODULES: List[Dict[str, Any]] = [
    {
        "module_id": "eu-ai-act-intro",
        "order": 1,
        "title": "EU AI Act Introduction",
        "description": "Overview of the EU AI Act, its objectives, scope, and implications for organizations.",
        "estimated_time": "45 minutes",
        "topics": ["AI Act Overview", "Key Definitions", "Prohibited Practices", "Risk Categories"],
        "role_relevance": {"decision_maker": "High", "developer": "High", "operator": "High", "user": "Medium"},
        "content": {
            "sections": [
                {
                    "title": "Introduction",
                    "content": (
                        "The EU AI Act is a regulatory framework that makes AI systems used in the European "
                        "Union safe, transparent, traceable and non-discriminatory. It takes a risk-based "
                        "approach: obligations grow with the risk a system poses."
                    ),
                },
                {
                    "title": "Learning Objectives",
                    "content": (
                        "Understand the purpose and scope of the Act. Identify the risk categories. "
                        "Recognize prohibited practices. Know the basic obligations of your role."
                    ),
                },
                {
                    "title": "Key Concepts",
                    "content": (
                        "Unacceptable risk systems are prohibited. High-risk systems face strict requirements. "
                        "Limited risk systems carry transparency obligations. Minimal risk systems are largely "
                        "unregulated."
                    ),
                },
            ],
            "assessments": [
                {
                    "question": "Which of the following is NOT one of the risk categories in the EU AI Act?",
                    "options": ["Unacceptable Risk", "High Risk", "Medium Risk", "Limited Risk"],
                    "correct_answer": "Medium Risk",
                },
                {
                    "question": "What happens to AI systems classified as 'Unacceptable Risk'?",
                    "options": [
                        "They require continuous monitoring",
                        "They are prohibited",
                        "They need special certification",
                        "They must be registered in an EU database",
                    ],
                    "correct_answer": "They are prohibited",
                },
            ],
        },
    },
    {
        "module_id": "risk-classification",
        "order": 2,
        "title": "Risk Classification System",
        "description": "Detailed exploration of the risk-based approach and classification criteria.",
        "estimated_time": "60 minutes",
        "topics": ["Risk-Based Approach", "Classification Criteria", "Examples by Category", "Risk Assessment Process"],
        "role_relevance": {"decision_maker": "High", "developer": "High", "operator": "Medium", "user": "Low"},
        "content": {
            "sections": [
                {
                    "title": "Classification Criteria",
                    "content": (
                        "A system is high-risk when it is a safety component of a regulated product or when it "
                        "falls under one of the use cases listed in Annex III, such as employment, education, "
                        "credit scoring or law enforcement."
                    ),
                },
                {
                    "title": "Risk Assessment Process",
                    "content": (
                        "Describe the intended purpose, check it against the prohibited practices of Article 5, "
                        "map it to Annex III and document the outcome together with the evidence used."
                    ),
                },
            ],
            "assessments": [
                {
                    "question": "Where are the high-risk use cases listed?",
                    "options": ["Annex I", "Annex III", "Article 52", "Recital 1"],
                    "correct_answer": "Annex III",
                },
            ],
        },
    },
    {
        "module_id": "technical-requirements",
        "order": 3,
        "title": "Technical Requirements",
        "description": "Technical compliance requirements for AI systems under the EU AI Act.",
        "estimated_time": "90 minutes",
        "topics": ["Data Governance", "Technical Documentation", "Record Keeping", "Transparency"],
        "role_relevance": {"decision_maker": "Medium", "developer": "High", "operator": "High", "user": "Low"},
        "content": {
            "sections": [
                {
                    "title": "Data Governance",
                    "content": (
                        "Training, validation and testing data must be relevant, representative and examined "
                        "for possible biases (Article 10)."
                    ),
                },
                {
                    "title": "Record Keeping",
                    "content": "High-risk systems must automatically log events over their lifetime (Article 12).",
                },
                {
                    "title": "Human Oversight",
                    "content": "Systems must be designed so that natural persons can oversee them effectively (Article 14).",
                },
            ],
            "assessments": [
                {
                    "question": "Which article covers data and data governance?",
                    "options": ["Article 5", "Article 10", "Article 14", "Article 52"],
                    "correct_answer": "Article 10",
                },
            ],
        },
    },
    {
        "module_id": "documentation-requirements",
        "order": 4,
        "title": "Documentation Requirements",
        "description": "Comprehensive guide to required documentation for AI system compliance.",
        "estimated_time": "75 minutes",
        "topics": ["Technical Documentation", "Risk Management", "Data Sheets", "User Instructions"],
        "role_relevance": {"decision_maker": "Medium", "developer": "High", "operator": "Medium", "user": "Low"},
        "content": {
            "sections": [
                {
                    "title": "Technical Documentation",
                    "content": (
                        "Annex IV lists the content of the technical documentation: a general description, the "
                        "development process, monitoring and control, and the risk management system."
                    ),
                },
                {
                    "title": "Instructions for Use",
                    "content": (
                        "Deployers receive instructions describing the intended purpose, accuracy, known "
                        "limitations and the human oversight measures (Article 13)."
                    ),
                },
            ],
            "assessments": [
                {
                    "question": "Which annex defines the technical documentation?",
                    "options": ["Annex II", "Annex III", "Annex IV", "Annex VIII"],
                    "correct_answer": "Annex IV",
                },
            ],
        },
    },
    {
        "module_id": "governance-framework",
        "order": 5,
        "title": "Governance Framework",
        "description": "Organizational governance structures for EU AI Act compliance.",
        "estimated_time": "60 minutes",
        "topics": ["Compliance Roles", "Reporting Structure", "Oversight Mechanisms", "Incident Response"],
        "role_relevance": {"decision_maker": "High", "developer": "Medium", "operator": "Medium", "user": "Low"},
        "content": {
            "sections": [
                {
                    "title": "Compliance Roles",
                    "content": (
                        "Assign accountable owners for each AI system: a provider contact, a compliance officer "
                        "and the operators who exercise human oversight."
                    ),
                },
                {
                    "title": "Incident Response",
                    "content": (
                        "Serious incidents must be reported to the market surveillance authority. Define who "
                        "detects, escalates and reports them."
                    ),
                },
            ],
            "assessments": [
                {
                    "question": "Who must serious incidents be reported to?",
                    "options": [
                        "The market surveillance authority",
                        "The system vendor only",
                        "The data protection officer only",
                        "Nobody",
                    ],
                    "correct_answer": "The market surveillance authority",
                },
            ],
        },
    },
    {
        "module_id": "implementation-case-studies",
        "order": 6,
        "title": "Implementation Case Studies",
        "description": "Real-world examples of EU AI Act implementation across various industries.",
        "estimated_time": "90 minutes",
        "topics": ["Healthcare AI", "Financial Services", "Manufacturing", "Public Services"],
        "role_relevance": {"decision_maker": "High", "developer": "High", "operator": "High", "user": "Medium"},
        "content": {
            "sections": [
                {
                    "title": "Financial Services",
                    "content": (
                        "Credit scoring systems are high-risk. A bank documented its model, added human review "
                        "of declined applications and monitored outcomes for bias."
                    ),
                },
                {
                    "title": "Healthcare AI",
                    "content": (
                        "Diagnostic support tools are usually medical devices and therefore high-risk; the AI "
                        "Act requirements are assessed together with the MDR conformity assessment."
                    ),
                },
            ],
            "assessments": [
                {
                    "question": "How is an AI credit scoring system classified?",
                    "options": ["Minimal risk", "Limited risk", "High risk", "Prohibited"],
                    "correct_answer": "High risk",
                },
            ],
        },
    },
]


def builtin_modules() -> List[TrainingModule]:
    """Fresh, unsaved ``TrainingModule`` entities for the built-in catalogue."""
    return [TrainingModule(**data) for data in BUILTIN_MODULES]
