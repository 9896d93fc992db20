from algoprep.models.pattern import Pattern
from algoprep.models.topic import Topic
from algoprep.models.problem import Problem, ProblemPattern, ProblemTopic
from algoprep.models.interview import Interview
from algoprep.models.submission import Submission
from algoprep.models.resume import ResumeProfile, Resume, ResumeVersion, CoverLetter

__all__ = [
    "Pattern",
    "Topic",
    "Problem",
    "ProblemPattern",
    "ProblemTopic",
    "Interview",
    "Submission",
    "ResumeProfile",
    "Resume",
    "ResumeVersion",
    "CoverLetter",
]
