"""
Tests for JD requirement extraction.
"""

from fastresume.core.requirements_extractor import MAX_REQUIREMENTS, extract_requirements


def test_bullet_glyphs_split_requirements():
    jd = "• Answer phone calls • Process refunds and returns"
    assert extract_requirements(jd) == ["Answer phone calls", "Process refunds and returns"]


def test_culture_lines_excluded():
    jd = """
We celebrate an inclusive culture across our stores
- Respond to customer emails within 24 hours
- Handle enquiries and quotes via email and phone
""".strip()
    assert extract_requirements(jd) == [
        "Respond to customer emails within 24 hours",
        "Handle enquiries and quotes via email and phone",
    ]


def test_short_lines_dropped():
    assert extract_requirements("- Sell\n- Maintain accurate stock records") == ["Maintain accurate stock records"]


def test_prose_falls_back_to_sentences():
    jd = (
        "We are a friendly local bakery in the heart of Fitzroy. "
        "Our shop is busy on weekends and the counter is the place where regulars chat with the crew. "
        "Good coffee and warm bread are what we are known for."
    )
    requirements = extract_requirements(jd)
    assert 0 < len(requirements) <= MAX_REQUIREMENTS
    assert all(r.strip() for r in requirements)
    assert requirements[0] == "We are a friendly local bakery in the heart of Fitzroy"


def test_capped_in_document_order():
    jd = "\n".join(f"- Handle customer order number {i}" for i in range(30))
    requirements = extract_requirements(jd)
    assert len(requirements) == MAX_REQUIREMENTS
    assert requirements[0] == "Handle customer order number 0"
    assert requirements[-1] == "Handle customer order number 19"


def test_empty_jd():
    assert extract_requirements("") == []
    assert extract_requirements(None) == []


def test_chinese_duties_kept():
    jd = """
岗位职责：
1. 负责门店日常客户咨询与投诉处理
2. 维护会员资料并跟进售后回访
门店位于市中心交通便利的商场内
我们为员工提供完善的福利与良好的团队氛围
""".strip()
    assert extract_requirements(jd) == ["负责门店日常客户咨询与投诉处理", "维护会员资料并跟进售后回访"]
