# assinaturas/utils/text_utils.py
import unicodedata


def strip_accents(s: str) -> str:
    """Remove os diacríticos de uma string.
    Ex: "Diário" -> "Diario"
    Ex: "Saúde e Bem-Estar" -> "Saude e Bem-Estar"
    """
    if not s:
        return ""
    decomposed = unicodedata.normalize("NFD", s)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize_label(s: str) -> str:
    """Sem acentos, minúsculo e sem espaços nas pontas. Usado para comparar rótulos digitados pelo usuário."""
    if not s:
        return ""
    return strip_accents(s).strip().lower()


def capitalize_first(s: str) -> str:
    """Deixa só a primeira letra maiúscula, sem mexer no resto ("xyz" -> "Xyz")."""
    if not s:
        return ""
    return s[0].upper() + s[1:]
