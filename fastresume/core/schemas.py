from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple


Score = float  # 0.0 to 1.0


class WorkEntry(BaseModel):
    """One job or volunteer position parsed from résumé text."""
    role: Optional[str] = None
    company: Optional[str] = None
    period: Optional[str] = None  # "Jan 2023 - Present", "2021 - 2023"
    bullets: List[str] = Field(default_factory=list)
    is_volunteer: bool = False


class Term(BaseModel):
    text: str
    frequency: int = Field(..., ge=1)
    n: int = Field(..., ge=1, le=3, description="1 = word, 2 = bigram, 3 = trigram")


class SkillClassification(BaseModel):
    hard: List[str] = Field(default_factory=list)
    soft: List[str] = Field(default_factory=list)


class Category(BaseModel):
    """Coverage category. Built once in lexicons.CATEGORIES."""
    model_config = ConfigDict(frozen=True)

    key: str
    token: str = Field(..., description="Canonical token as produced by normalize_text()")
    label_en: str
    label_zh: str
    hints: Tuple[str, ...] = ()


class Evidence(BaseModel):
    work_index: int = Field(..., ge=0, description="Index into the parsed work entries")
    role: Optional[str] = None
    company: Optional[str] = None
    bullet: Optional[str] = None  # None when supported only by role/company context
    score: Score = Field(..., ge=0.0, le=1.0)


class CoverageItem(BaseModel):
    key: str
    label_en: str
    label_zh: str
    covered: bool = False
    evidence: Optional[Evidence] = None


class RequirementMatch(BaseModel):
    requirement: str
    bullets: List[str] = Field(default_factory=list)
    score: Score = Field(default=0.0, ge=0.0, le=1.0)


class SelectionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_primary: int = Field(default=2, ge=0, description="Entries shown as primary experience")
    add_count: int = Field(default=1, ge=0, description="Entries shown as additional experience")
    bullet_cap: int = Field(default=3, ge=0, description="Max bullets kept on additional entries")


class SelectionResult(BaseModel):
    primary: List[WorkEntry] = Field(default_factory=list)
    additional: List[WorkEntry] = Field(default_factory=list)


class ContactInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    links: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    """Education entry in candidate profile."""
    school: Optional[str] = None  # University, College, Institute name
    degree: Optional[str] = None  # Bachelor, Master, PhD, MBA, Associate, Diploma, Certificate
    field_of_study: Optional[str] = None  # Computer Science, Marketing, etc.
    period: Optional[str] = None


class AnalyzeRequest(BaseModel):
    resume_text: str
    jd_text: str = ""
    options: SelectionOptions = Field(default_factory=SelectionOptions)


class BatchAnalyzeRequest(BaseModel):
    resumes: List[str] = Field(default_factory=list)
    jd_text: str = ""
    options: SelectionOptions = Field(default_factory=SelectionOptions)


class AnalysisResponse(BaseModel):
    contact: ContactInfo
    education: List[EducationEntry] = Field(default_factory=list)
    work_entries: List[WorkEntry] = Field(default_factory=list)
    resume_terms: List[str] = Field(default_factory=list)
    jd_terms: List[str] = Field(default_factory=list)
    resume_skills: SkillClassification = Field(default_factory=SkillClassification)
    jd_skills: SkillClassification = Field(default_factory=SkillClassification)
    jd_matched_skills: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    matches: List[RequirementMatch] = Field(default_factory=list)
    coverage_pct: int = Field(default=0, ge=0, le=100)
    coverage: List[CoverageItem] = Field(default_factory=list)
    selection: SelectionResult = Field(default_factory=SelectionResult)
    highlight_terms: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
