import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from app.models.application import Application
from app.models.job import Job

WORD = re.compile(r"\b\w{3,}\b")
TOP_KEYWORDS = 10


@dataclass
class ScoreSummary:
    score: int = 0
    strong: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


def summarize(applications: Iterable[Application], jobs: Dict[str, Job]) -> ScoreSummary:
    """
    Average ATS score across an applicant's applications, plus the words
    that recur in most of the applied jobs (strong) and those that only
    show up in a few of them (missing).
    """
    applications = [a for a in applications if a.job_id in jobs]
    if not applications:
        return ScoreSummary()

    total = len(applications)
    average = round(sum(a.ats_score for a in applications) / total)

    frequency = Counter()
    for application in applications:
        job = jobs[application.job_id]
        text = f"{job.description} {job.constraints or ''}".lower()
        frequency.update(set(WORD.findall(text)))

    strong = sorted((w for w, n in frequency.items() if n > total * 0.7), key=lambda w: (-frequency[w], w))
    missing = sorted((w for w, n in frequency.items() if n < total * 0.3), key=lambda w: (frequency[w], w))

    return ScoreSummary(score=average, strong=strong[:TOP_KEYWORDS], missing=missing[:TOP_KEYWORDS])
