"""Promotional slide catalog (campus hiring and internship drives)."""

from urllib.parse import quote

from signboard.models import PromoRecord

DEFAULT_PROMOS: tuple[PromoRecord, ...] = (
    PromoRecord(
        company="TCS iON",
        role="Young Professional Internship",
        description=(
            "Early-career program bridging academic theory and industry practice, "
            "working on live cloud infrastructure and AI-driven projects."
        ),
        type="Remote / Hybrid",
        target_audience="CS / IT / AI-DS (1st & 2nd Year)",
        deadline="Feb 28, 2026",
        stipend="₹15,000 - ₹25,000 / Month",
        link="https://www.tcs.com/careers",
        eligibility=(
            "B.Tech 2027/28 Batch",
            "Min CGPA: 6.0 (No Backlogs)",
            "Skill: Python / Java / C++",
            "Problem Solving",
        ),
    ),
    PromoRecord(
        company="Google",
        role="Software Engineering Intern",
        description=(
            "Build next-generation technologies on large distributed systems "
            "alongside production engineering teams."
        ),
        type="On-site (Bangalore)",
        target_audience="CS / IT (Pre-final Year)",
        deadline="Mar 15, 2026",
        stipend="₹80,000 / Month",
        link="https://careers.google.com/students/",
        eligibility=(
            "B.Tech 2027 Batch",
            "Strong DSA Proficiency",
            "C++ / Java / Go / Python",
            "Excellent OS Concepts",
        ),
    ),
    PromoRecord(
        company="Microsoft",
        role="Data Science Intern",
        description=(
            "Build predictive models over large datasets and deliver insights "
            "for core cloud services."
        ),
        type="Hybrid",
        target_audience="AI-DS / CS (3rd Year)",
        deadline="Mar 10, 2026",
        stipend="₹75,000 / Month",
        link="https://careers.microsoft.com/students/",
        eligibility=(
            "B.Tech 2027 Batch",
            "ML / AI Fundamentals",
            "Python / SQL / R",
            "Strong Analytical Skills",
        ),
    ),
)


def qr_code_url(link: str) -> str:
    """URL of a QR code image pointing at ``link``."""
    return (
        "https://api.qrserver.com/v1/create-qr-code/"
        f"?size=250x250&data={quote(link, safe='')}&color=d35400"
    )
