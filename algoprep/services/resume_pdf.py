"""
PDF rendering of a resume (fpdf2, core Helvetica font).
"""
import re
from typing import Any, Dict, Iterable

from fpdf import FPDF


def _latin1(text: Any) -> str:
    # core fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


def _skill_label(key: str) -> str:
    # devopsAndTools -> Devops And Tools
    words = re.sub(r"([a-z])([A-Z])", r"\1 \2", key).split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def resume_filename(title: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", title, flags=re.IGNORECASE).lower() + "_resume.pdf"


class ResumePDF(FPDF):
    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 10, f"Page {self.page_no()}", align="C")

    def section_title(self, title: str):
        self.ln(3)
        self.set_font("Helvetica", "B", 12)
        self.set_fill_color(230, 230, 230)
        self.cell(0, 7, _latin1(title), fill=True, new_x="LMARGIN", new_y="NEXT")
        self.ln(2)

    def para(self, text: str, style: str = "", size: int = 10, h: float = 5):
        self.set_font("Helvetica", style, size)
        self.multi_cell(0, h, _latin1(text), new_x="LMARGIN", new_y="NEXT")

    def bullets(self, items: Iterable[Any]):
        for item in items:
            self.para(f"- {item}")


def render_resume_pdf(title: str, content: Dict[str, Any]) -> bytes:
    """Tailored content wins over the raw profile when an analysis has run."""
    tailored = content.get("tailoredContent")
    data = tailored if isinstance(tailored, dict) and tailored.get("personalInfo") else content
    info = data.get("personalInfo") or {}
    contact = info.get("contact") or {}

    pdf = ResumePDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    pdf.para(info.get("name") or title, "B", 18, 9)
    if info.get("title"):
        pdf.para(info["title"], "", 12, 6)
    contact_line = "  |  ".join(str(v) for v in (contact.get("email"), contact.get("phone")) if v)
    if contact_line:
        pdf.para(contact_line, "", 9)

    if data.get("summary"):
        pdf.section_title("Summary")
        pdf.para(data["summary"])

    skills = data.get("technicalSkills") or {}
    if skills:
        pdf.section_title("Technical Skills")
        if isinstance(skills, dict):
            for key, values in skills.items():
                if values:
                    listed = ", ".join(str(v) for v in values) if isinstance(values, list) else str(values)
                    pdf.para(f"{_skill_label(key)}: {listed}")
        else:
            pdf.para(", ".join(str(s) for s in skills))

    experience = data.get("experience") or []
    if experience:
        pdf.section_title("Experience")
        for exp in experience:
            pdf.para(exp.get("company", ""), "B", 11, 6)
            pdf.para(" - ".join(str(v) for v in (exp.get("position"), exp.get("duration")) if v), "I")
            pdf.bullets(exp.get("responsibilities") or [])
            if exp.get("technologies"):
                pdf.para("Technologies: " + ", ".join(str(t) for t in exp["technologies"]), "", 9)
            pdf.ln(2)

    education = data.get("education") or []
    if education:
        pdf.section_title("Education")
        for edu in education:
            pdf.para(edu.get("institution", ""), "B", 11, 6)
            if edu.get("degree"):
                pdf.para(edu["degree"])
            if edu.get("courses"):
                pdf.para("Courses: " + ", ".join(str(c) for c in edu["courses"]), "", 9)
            if edu.get("year"):
                pdf.para(edu["year"], "I", 9)
            pdf.ln(1)

    achievements = data.get("achievements") or []
    if achievements:
        pdf.section_title("Achievements")
        pdf.bullets(achievements)

    pdf.set_title(_latin1(title))
    return bytes(pdf.output())
