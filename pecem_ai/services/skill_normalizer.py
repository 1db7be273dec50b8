# pecem_ai/services/skill_normalizer.py
import re
import unicodedata
from typing import Dict, List

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Lowercase, strip diacritics (NFD), turn punctuation into spaces and
    collapse whitespace. Idempotent: normalize_text(normalize_text(s)) == normalize_text(s).
    """
    if not text:
        return ""
    s = unicodedata.normalize("NFD", text.lower())
    s = _COMBINING_MARKS.sub("", s)
    s = _PUNCTUATION.sub(" ", s)
    s = _WHITESPACE.sub(" ", s)
    return s.strip()


def skills_overlap(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction. Blank strings never match."""
    a, b = a.strip().lower(), b.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


# Search synonyms (query term -> related terms)
SYNONYMS_MAP: Dict[str, List[str]] = {
    # Port operations
    "empilhadeira": ["reach stacker", "operador", "movimentação", "carga", "armazém"],
    "portuário": ["porto", "terminal", "cais", "doca", "marítimo"],
    "operador": ["operação", "controle", "manejo"],
    "carga": ["descarga", "carregamento", "movimentação"],

    # Technical areas
    "elétrica": ["eletricista", "instalação", "manutenção elétrica", "circuito", "energia"],
    "mecânica": ["mecânico", "manutenção", "reparo", "máquina"],
    "soldagem": ["soldador", "solda", "metalurgia"],
    "eletrônica": ["eletrônico", "automação", "controle"],

    # Administrative
    "administração": ["administrativo", "gestão", "gerência"],
    "recursos humanos": ["rh", "pessoal", "gente", "talentos"],
    "contabilidade": ["contador", "fiscal", "financeiro"],
    "logística": ["supply chain", "armazém", "distribuição", "estoque"],

    # Technology
    "programação": ["código", "desenvolvimento", "software", "programador"],
    "ti": ["tecnologia", "informática", "sistemas", "tech"],
    "excel": ["planilha", "spreadsheet", "dados", "office"],
    "word": ["documento", "texto", "editor", "office"],

    # Soft skills
    "liderança": ["líder", "gestão", "coordenação", "supervisão"],
    "comunicação": ["comunicar", "relacionamento", "atendimento"],
    "trabalho em equipe": ["colaboração", "time", "grupo"],
    "organização": ["organizado", "planejamento", "estrutura"],

    # Levels
    "básico": ["iniciante", "fundamental", "introdução", "começo"],
    "intermediário": ["médio", "regular", "moderado"],
    "avançado": ["expert", "especialista", "proficiente", "senior"],

    # Modes
    "ead": ["online", "distância", "remoto", "digital"],
    "presencial": ["ao vivo", "físico", "local"],
    "híbrido": ["misto", "blended", "combinado"],

    # Safety
    "segurança": ["safety", "proteção", "prevenção", "epi"],
    "nr": ["norma regulamentadora", "segurança do trabalho"],

    # Certifications / training
    "certificação": ["certificado", "diploma", "qualificação", "credencial"],
    "curso": ["treinamento", "capacitação", "formação", "aula"],
}

# Required-skill -> related candidate skills worth partial credit in matching.
# Compared on lowercased (not accent-stripped) strings.
SKILL_SEMANTIC_MAP: Dict[str, List[str]] = {
    "empilhadeira": ["reach stacker", "operação", "logística", "armazenagem"],
    "excel": ["planilhas", "office", "dados", "relatórios"],
    "comunicação": ["atendimento", "relacionamento", "equipe"],
    "liderança": ["gestão", "coordenação", "supervisão"],
    "elétrica": ["manutenção", "instalações", "circuitos"],
}

# Candidate main area -> course keywords
AREA_KEYWORDS: Dict[str, List[str]] = {
    "Operação de Equipamentos": ["empilhadeira", "operação", "equipamentos", "logística"],
    "Administrativa": ["gestão", "administrativa", "supply", "logística"],
    "Manutenção Industrial": ["nr-10", "elétrica", "manutenção", "segurança"],
    "Segurança do Trabalho": ["nr-", "segurança", "altura", "epi"],
}

# Search intent categories, checked in this order on ties
INTENT_KEYWORDS: Dict[str, List[str]] = {
    "course": ["curso", "aula", "aprender", "estudar", "capacitação", "treinamento"],
    "job": ["vaga", "emprego", "trabalho", "oportunidade", "contratação"],
    "certification": ["certificado", "certificação", "diploma"],
    "skill": ["habilidade", "skill", "competência", "saber"],
}

STOP_WORDS = {
    "o", "a", "os", "as", "de", "da", "do", "das", "dos",
    "em", "no", "na", "nos", "nas", "para", "por", "com",
    "um", "uma", "uns", "umas", "e", "ou", "que", "qual",
}


# Normalized copies are built once at import and never mutated afterwards,
# so accented table entries still match normalized text.
def _normalize_table(table: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {normalize_text(k): [normalize_text(v) for v in values] for k, values in table.items()}


_NORMALIZED_SYNONYMS = _normalize_table(SYNONYMS_MAP)
NORMALIZED_INTENT_KEYWORDS = _normalize_table(INTENT_KEYWORDS)


def get_synonyms(term: str) -> List[str]:
    """
    Related terms for a search term (normalized).
    Direct key lookup first, then reverse lookup: if the term is itself listed
    as a synonym, return its key plus the key's other synonyms.
    """
    normalized = normalize_text(term)
    if not normalized:
        return []

    direct = _NORMALIZED_SYNONYMS.get(normalized)
    if direct is not None:
        return list(direct)

    for key, synonyms in _NORMALIZED_SYNONYMS.items():
        if normalized in synonyms:
            return [key] + [s for s in synonyms if s != normalized]

    return []


def get_semantic_matches(required_skill: str) -> List[str]:
    return SKILL_SEMANTIC_MAP.get(required_skill.lower(), [])


def get_area_keywords(main_area: str) -> List[str]:
    return AREA_KEYWORDS.get(main_area, [])
