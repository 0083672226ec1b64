"""
Static vocabulary shared by every analysis stage.

All tables here are built once at import and never mutated afterwards:
frozensets for membership checks, tuples for ordered tables, and
pre-compiled regexes for pattern tables.
"""

import re
from typing import Tuple

from fastresume.core.schemas import Category


# ===== STOPWORDS =====
# Generic English fillers, JD boilerplate, months and a few ZH connectives.

STOPWORDS = frozenset({
    # articles, prepositions, auxiliaries
    "the", "and", "a", "an", "to", "of", "in", "for", "on", "with", "by",
    "is", "are", "as", "at", "from", "or", "that", "this", "your", "you", "we", "our", "be", "will",
    "if", "without", "been", "being", "its", "they", "their", "he", "she", "i", "me", "my",
    # modal/ability words
    "can", "would", "could", "should", "must", "may", "might",
    # JD fillers
    "new", "one", "great", "ideal", "fill", "successful", "better", "have", "before", "even",
    "then", "always", "full", "any", "fun", "largest", "fastest", "growing", "fastest-growing",
    "issue", "issues", "plus", "also", "all", "about", "within", "across", "etc",
    # interrogatives
    "who", "what", "why", "how", "where", "when", "which", "whom", "whose",
    # very generic verbs
    "make", "makes", "made", "making",
    "do", "does", "did", "done",
    "use", "uses", "using",
    "work", "works", "worked", "working",
    "keep", "keeps", "keeping",
    "want", "wants", "wanted", "wanting",
    "like", "likes", "liked", "liking",
    "need", "needs", "needed", "needing",
    "ensure", "ensures", "ensured", "ensuring",
    "help", "helps", "helped", "helping",
    "think", "thinks", "thinking",
    "just", "now", "into", "actually",
    # generic nouns that are never skills in JD context
    "person", "people", "team", "experience", "corp",
    # months
    "jan", "january", "feb", "february", "mar", "march", "apr", "april", "jun", "june",
    "jul", "july", "aug", "august", "sep", "sept", "september", "oct", "october",
    "nov", "november", "dec", "december",
    # recruitment noise
    "agency", "recruitment", "tasked", "roles", "role", "candidates", "candidate", "highly", "regarded",
    # ZH connectives
    "我们", "以及", "能够", "具有", "或者", "并且", "相关",
})


# ===== CANONICALIZATION TABLES =====

# British -> American spelling, applied whole-word
SPELLING_TABLE: Tuple[Tuple[str, str], ...] = (
    ("centre", "center"),
    ("centres", "centers"),
    ("organise", "organize"),
    ("organised", "organized"),
    ("organising", "organizing"),
    ("organisation", "organization"),
    ("organisations", "organizations"),
    ("analyse", "analyze"),
    ("analysed", "analyzed"),
    ("analysing", "analyzing"),
    ("optimise", "optimize"),
    ("optimised", "optimized"),
    ("prioritise", "prioritize"),
    ("prioritising", "prioritizing"),
    ("utilise", "utilize"),
    ("customise", "customize"),
    ("recognise", "recognize"),
    ("recognised", "recognized"),
    ("specialise", "specialize"),
    ("specialised", "specialized"),
    ("colour", "color"),
    ("behaviour", "behavior"),
    ("favour", "favor"),
    ("labour", "labor"),
    ("enquiry", "inquiry"),
    ("enquiries", "inquiries"),
    ("enquire", "inquire"),
    ("licence", "license"),
    ("programme", "program"),
    ("programmes", "programs"),
    ("catalogue", "catalog"),
    ("defence", "defense"),
    ("fulfil", "fulfill"),
    ("judgement", "judgment"),
    ("travelling", "traveling"),
    ("modelling", "modeling"),
    ("cancelled", "canceled"),
)

# Multi-word phrase -> single canonical token, applied whole-word after spelling.
# Longer phrases first so they win over their own prefixes.
SYNONYM_TABLE: Tuple[Tuple[str, str], ...] = (
    ("customer service", "customerservice"),
    ("customer services", "customerservice"),
    ("customer support", "customerservice"),
    ("customer care", "customerservice"),
    ("client service", "customerservice"),
    ("client services", "customerservice"),
    ("call center", "callcenter"),
    ("contact center", "callcenter"),
    ("front of house", "reception"),
    ("front desk", "reception"),
    ("point of sale", "pos"),
    ("stock control", "inventory"),
    ("stock management", "inventory"),
    ("inventory management", "inventory"),
    ("cash handling", "cashhandling"),
    ("e-mail", "email"),
    ("e-mails", "emails"),
    ("telephone", "phone"),
    ("客户服务", "customerservice"),
)


# ===== SKILL LEXICONS =====

HARD_SKILLS = frozenset({
    # engineering
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "ruby", "php", "swift", "kotlin",
    "react", "vue", "angular", "next", "nuxt", "svelte", "node", "express", "nestjs", "webpack", "vite",
    "tailwind", "css", "scss", "sass", "html", "dom", "graphql", "rest", "api",
    "docker", "kubernetes", "k8s", "container", "terraform", "ansible", "linux", "unix", "macos", "windows",
    "aws", "gcp", "azure", "cloudfront", "s3", "ec2", "lambda", "dynamodb", "rds", "cloud",
    "mysql", "postgres", "postgresql", "mongodb", "redis", "sqlite", "sql", "db", "database",
    "ml", "ai", "llm", "pytorch", "tensorflow", "sklearn", "nlp",
    # design / marketing / e-commerce / analytics tools
    "figma", "canva", "photoshop", "illustrator", "premiere", "indesign", "lightroom",
    "seo", "sem", "crm", "hubspot", "mailchimp", "salesforce", "ga", "ga4", "analytics",
    "shopify", "wordpress", "wix", "squarespace",
    "copywriting", "design", "graphic", "video", "editing", "content", "ads",
    # office / operations tools
    "excel", "word", "powerpoint", "outlook", "xero", "myob", "quickbooks", "sap", "pos",
})

HARD_PHRASES = frozenset({
    "after effects",
    "google ads",
    "facebook ads",
    "meta ads",
    "social media",
    "content creation",
    "video editing",
    "graphic design",
    "google analytics",
    "social media management",
    "microsoft office",
    "data entry",
})

SOFT_SKILL_HINTS = frozenset({
    "communication", "communicate", "teamwork", "collaboration", "leadership", "adaptability",
    "flexibility", "punctual", "punctuality", "reliable", "reliability", "organized",
    "organization", "multitasking", "multitask", "problem-solving", "initiative", "empathy",
    "patience", "friendly", "attitude", "interpersonal", "negotiation",
    "customerservice", "motivated", "proactive",
    "沟通", "团队合作", "责任心", "领导力",
})

# Generic words ("time", "detail") only count inside these phrases
SOFT_SKILL_PHRASES = frozenset({
    "attention to detail", "attention detail", "detail oriented", "time management",
    "positive attitude", "work ethic",
})

# Canonical phrase patterns: (pattern, label, kind), first match wins
CANONICAL_SKILL_PATTERNS: Tuple[Tuple["re.Pattern[str]", str, str], ...] = (
    (re.compile(r"\b(design(?:ed|ing)?)\s+marketing\s+posters\b", re.I), "poster design", "hard"),
    (re.compile(r"\bmarketing\s+posters\b", re.I), "poster design", "hard"),
    (re.compile(r"\bcontent\s+social\s+media\b", re.I), "social media content creation", "hard"),
    (re.compile(r"\bsocial\s+media\s+content\b", re.I), "social media content creation", "hard"),
    (re.compile(r"\bsocial\s+media\b", re.I), "social media", "hard"),
    (re.compile(r"\bgoogle\s+ads?\b", re.I), "google ads", "hard"),
    (re.compile(r"\b(facebook|meta)\s+ads?\b", re.I), "facebook/meta ads", "hard"),
    (re.compile(r"\bgoogle\s+(analytics|ga4)\b", re.I), "google analytics", "hard"),
    (re.compile(r"\bvideo\s+editing\b", re.I), "video editing", "hard"),
    (re.compile(r"\bgraphic\s+design\b", re.I), "graphic design", "hard"),
    (re.compile(r"\bcustomerservice\b", re.I), "customer service", "soft"),
    (re.compile(r"\bcustomer\s+(service|support|care)\b", re.I), "customer service", "soft"),
    (re.compile(r"\bcashhandling\b", re.I), "cash handling", "soft"),
    (re.compile(r"\bcallcenter\b", re.I), "call center", "soft"),
    (re.compile(r"\bproblem[\s-]solving\b", re.I), "problem solving", "soft"),
    (re.compile(r"\btime\s+management\b", re.I), "time management", "soft"),
)

# Fragments that are never skills (places, schools, brands, role nouns, noise)
NON_SKILL_PARTS = frozenset({
    "melbourne", "sydney", "brisbane", "perth", "adelaide", "beijing", "shanghai", "new", "york",
    "los", "angeles", "london", "paris", "tokyo",
    "university", "college", "school", "academy", "institute", "campus", "rmit", "vic",
    "bethel", "bread", "life", "kfc", "mcdonald", "mcdonalds", "starbucks",
    "crew", "member", "student", "intern", "assistant", "coordinator", "manager", "host", "hostess",
    "cashier", "server", "waiter", "waitress",
    "present", "provided", "provide", "brand", "designed", "designing", "created", "creating",
    "during", "customers", "through", "assisted", "engagement", "supported", "visual", "posters",
})

ORG_FRAGMENT_RE = re.compile(r"(company|\binc\.?|\bco\.|corp\.?|ltd\.?|\bllc\b|studio|agency|group|pty)", re.I)
SKILL_LOCATION_RE = re.compile(
    r"(melbourne|sydney|brisbane|beijing|shanghai|new\s+york|los\s+angeles|london|paris|tokyo)", re.I
)
SKILL_ROLE_RE = re.compile(
    r"(crew|member|student|intern|assistant|coordinator|manager|host|hostess|cashier|server|waiter|waitress)", re.I
)


# ===== RÉSUMÉ STRUCTURE VOCABULARY =====

MONTHS_RE = re.compile(
    r"\b(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|jun(?:e)?|jul(?:y)?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b",
    re.I,
)

LOCATION_RE = re.compile(
    r"\b(melbourne|sydney|brisbane|perth|adelaide|canberra|hobart|beijing|shanghai|kunming|shenzhen|guangzhou"
    r"|china|australia|united\s+states|usa|uk|england|canada|singapore|hong\s*kong|taiwan|new\s+zealand"
    r"|victoria|vic|nsw|qld|queensland|guangdong|london|toronto|auckland)\b",
    re.I,
)

ROLE_NOUN_RE = re.compile(
    r"\b(manager|assistant|intern|coordinator|specialist|engineer|designer|consultant|associate|lead"
    r"|analyst|marketing|sales|customer|service|support|operator|representative|ambassador|officer"
    r"|creator|editor|videographer|copywriter|crew|member|barista|cashier|server|waiter|waitress"
    r"|receptionist|supervisor|director|administrator|clerk|attendant|agent|developer|volunteer|tutor"
    r"|teacher|photographer|host|hostess|chef|cook|driver|technician|planner|producer|writer)\b",
    re.I,
)
ROLE_NOUN_ZH_RE = re.compile(r"(经理|助理|专员|实习生|客服|销售|店员|收银|前台|主管|设计师|工程师|志愿者|文员|编辑|运营)")

ACTION_VERB_RE = re.compile(
    r"\b(manage|managed|design|designed|develop|developed|implement|implemented|optimize|optimized"
    r"|build|built|lead|led|coordinate|coordinated|analyze|analyzed|research|researched|support|supported"
    r"|maintain|maintained|deliver|delivered|drive|driven|own|owned|plan|planned|execute|executed|write|wrote"
    r"|capture|captured|collect|collected|assist|assisted|create|created|film|filmed|edit|edited"
    r"|produce|produced|taught|guided|ensured|work|worked|collaborate|collaborated|handle|handled"
    r"|process|processed|greet|greeted|serve|served|answer|answered|prepare|prepared|respond|responded)\b",
    re.I,
)

NON_TITLE_PREPOSITION_RE = re.compile(r"\b(for|with|to|in|on|by|from)\b", re.I)

SECTION_WORD_RE = re.compile(
    r"\b(skills?|projects?|certifications?|awards?|publications?|summary|profile|objective|about\s+me"
    r"|interests?|hobbies?|languages?|references?|social\s+media\s+platforms?)\b",
    re.I,
)

PLATFORM_BRAND_RE = re.compile(
    r"\b(tiktok|douyin|xiaohongshu|redbook|wechat|we\s*chat|instagram|facebook|meta|youtube|twitter"
    r"|linkedin|snapchat|pinterest)\b",
    re.I,
)

BAD_COMPANY_RE = re.compile(
    r"\b(promotions|videos|photos|content|social\s+media|customer|marketing|campaigns|sales)\b", re.I
)

COMPANY_SUFFIX_RE = re.compile(
    r"\b(inc\.?|ltd\.?|llc|pty(?:\s*ltd)?|co\.|corp\.?|corporation|company|limited|group|agency|studio"
    r"|gmbh|university|college|school|academy)(?=\W|$)|(公司|集团|有限公司|工作室)",
    re.I,
)

EMPLOYMENT_TYPE_RE = re.compile(
    r"\b(intern(?:ship)?|freelance(?:r)?|contract(?:or)?|part[-\s]?time|full[-\s]?time|casual|temporary|temp"
    r"|self[-\s]?employed|volunteer)\b",
    re.I,
)

VOLUNTEER_ORG_RE = re.compile(
    r"(church|foundation|community\s*(center|church)?|food\s*bank|charity|ministry|\bngo\b"
    r"|non\s*-?\s*profit|nonprofit|outreach|donation|bethel|bread\s+of\s+life|sunday\s+school)",
    re.I,
)

VOLUNTEER_SIGNAL_RE = re.compile(
    r"(volunteer|volunteering|志愿|义工|charity|foundation|non\s*-?\s*profit|nonprofit"
    r"|community\s+(service|center|church)|\bngo\b|donation|fund\s*raising|church|ministry|outreach"
    r"|mentor|peer\s+mentor|student\s+council|sunday\s+school)",
    re.I,
)

VOLUNTEER_SECTION_RE = re.compile(r"^(volunteer(?:ing)?(\s+(experience|work|history))?|志愿者?\s*(经历|经验|服务)?)$", re.I)
EXPERIENCE_SECTION_RE = re.compile(
    r"^((work|professional|employment|career|relevant)\s+)?(experience|history|employment)$|^(工作|实习)\s*(经历|经验)$",
    re.I,
)

# Sections whose lines never hold work entries
OTHER_SECTION_HEADERS = frozenset({
    "education", "academic background", "education & training", "education and training",
    "skills", "technical skills", "soft skills", "key skills", "core competencies", "competencies",
    "summary", "professional summary", "profile", "career objective", "objective", "about me",
    "projects", "certifications", "certificates", "licenses", "awards", "publications",
    "languages", "references", "interests", "hobbies", "additional information", "contact",
    "教育", "教育背景", "教育经历", "技能", "专业技能", "个人简介", "项目经历", "证书", "语言", "兴趣爱好",
})

# Section-heading vocabulary that can never be part of a person's name
NAME_HEADER_EN_RE = re.compile(
    r"\b(profile|summary|objective|experience|work\s+experience|professional\s+experience|skills?|education"
    r"|certifications?|projects?|references?|awards?|publications?|languages?|contact|work\s+history"
    r"|employment|curriculum\s+vitae|resume)\b",
    re.I,
)
NAME_HEADER_ZH_RE = re.compile(r"(简介|摘要|概述|个人简介|工作经历|工作经验|专业经历|教育|教育背景|技能|证书|项目|参考|荣誉|出版物|语言|联系方式|个人信息)")
NAME_BANNED_TOKENS = frozenset({
    "professional", "experience", "work", "skills", "skill", "education", "project", "projects",
    "certification", "certifications", "summary", "objective", "profile", "references", "awards",
    "publications", "languages", "contact", "history", "employment", "resume", "curriculum", "vitae",
})

# Trailing profile-slug words that describe the person, not name them
SLUG_DESCRIPTOR_WORDS = frozenset({
    "resume", "cv", "profile", "official", "portfolio", "designer", "developer", "engineer",
    "marketing", "marketer", "sales", "manager", "consultant", "creative", "photography", "au", "us", "uk",
})


# ===== JD VOCABULARY =====

JD_CULTURE_PATTERNS: Tuple["re.Pattern[str]", ...] = (
    re.compile(
        r"(inclusive|supportive|rewarding|great\s+place|we\s+value|celebrate|culture|fun\s+culture"
        r"|company\s+values|diverse|belonging)",
        re.I,
    ),
    re.compile(r"(价值观|使命|愿景|文化|包容|多元|归属|支持性|奖励|氛围|庆祝|成长机会|发展机会|幸福感|工作环境|福利|团队氛围)"),
    re.compile(r"(largest|fastest[- ]?growing|industry[- ]?leading)\s+(company|business|transport|courier|taxi)", re.I),
)

JD_ACTION_VERB_RE = re.compile(
    r"(负责|搭建|制定|管理|优化|推进|执行|监控|分析|协作|设计|开发|测试|维护|运营|跟进|对接|落地|产出|输出|研究|调研"
    r"|策划|监督|组织|编写|撰写|安排|协调|提升|确保|参与|改进|跟踪|汇报|处理|接待"
    r"|prepare|manage|lead|build|design|develop|implement|execute|monitor|analy[sz]e|coordinate|plan"
    r"|schedule|deliver|maintain|support|improve|ensure|participate|track|report|handle|process"
    r"|communicate|respond|assist|greet|answer|serve|sell|resolve)",
    re.I,
)

JD_HEADER_HINT_RE = re.compile(
    r"(职责|要求|岗位|职位|描述|关键|任务|目标|responsibilit|requirement|duty|duties|expectation|must|need"
    r"|you\s+will|we\s+expect)",
    re.I,
)


# ===== COVERAGE CATEGORIES =====

CATEGORIES: Tuple[Category, ...] = (
    Category(
        key="customer_service",
        token="customerservice",
        label_en="Customer Service",
        label_zh="客户服务",
        hints=("inquiries", "complaints", "customers", "clients", "callcenter", "customer satisfaction",
               "customer feedback", "客服"),
    ),
    Category(
        key="sales",
        token="sales",
        label_en="Sales",
        label_zh="销售",
        hints=("quotes", "leads", "upselling", "revenue", "sales targets", "follow up leads", "销售"),
    ),
    Category(
        key="orders",
        token="orders",
        label_en="Order Processing",
        label_zh="订单处理",
        hints=("order processing", "process orders", "purchase orders", "dispatch", "deliveries", "订单"),
    ),
    Category(
        key="inventory",
        token="inventory",
        label_en="Inventory",
        label_zh="库存管理",
        hints=("stock", "restock", "inventory records", "warehouse", "stock levels", "库存"),
    ),
    Category(
        key="reception",
        token="reception",
        label_en="Reception",
        label_zh="前台接待",
        hints=("receptionist", "greeting", "appointments", "visitors", "switchboard", "前台"),
    ),
    Category(
        key="communication",
        token="communication",
        label_en="Communication",
        label_zh="沟通",
        hints=("email", "phone", "correspondence", "client communication", "liaise", "沟通"),
    ),
    Category(
        key="administration",
        token="administration",
        label_en="Administration",
        label_zh="行政",
        hints=("data entry", "filing", "scheduling", "records", "admin", "行政"),
    ),
    Category(
        key="cash_handling",
        token="cashhandling",
        label_en="Cash Handling",
        label_zh="收银",
        hints=("pos", "cashier", "payments", "till", "cash", "收银"),
    ),
    Category(
        key="marketing",
        token="marketing",
        label_en="Marketing",
        label_zh="市场营销",
        hints=("social media", "campaigns", "content creation", "promotions", "branding", "营销"),
    ),
    Category(
        key="hospitality",
        token="hospitality",
        label_en="Hospitality",
        label_zh="餐饮服务",
        hints=("food service", "barista", "restaurant", "guests", "food preparation", "餐饮"),
    ),
    Category(
        key="leadership",
        token="leadership",
        label_en="Leadership",
        label_zh="领导力",
        hints=("supervise", "mentoring", "training staff", "team leader", "roster", "带领团队"),
    ),
)
