"""
Normalisation de l'e-mail saisi au checkout.
- Une seule adresse (grammaire RFC 5322 "address-list"), nom affiché optionnel.
- Adresse validée par email-validator (syntaxe, domaine avec TLD reconnu), sans requête DNS.
"""
from email.utils import getaddresses, quote
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict

_SPECIALS = set('()<>@,;:\\".[]')


class NormalizedEmail(BaseModel):
    name: Optional[str] = None
    address: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if not self.name:
            return self.address
        # pas d'encodage RFC 2047: la forme reste relisible par normalize_email
        if any(c in _SPECIALS for c in self.name):
            return f'"{quote(self.name)}" <{self.address}>'
        return f"{self.name} <{self.address}>"


def normalize_email(raw: Optional[str]) -> Optional[NormalizedEmail]:
    """
    Retourne l'adresse normalisée, ou None si l'entrée est rejetée:
    - vide, plusieurs adresses ("a@x.com, b@y.com"), syntaxe invalide
    - domaine sans TLD ("a@localhost") ou réservé (".test", ".local", ...)
    """
    if not raw or not raw.strip():
        return None

    pairs = [p for p in getaddresses([raw]) if p != ("", "")]
    if len(pairs) != 1:
        return None

    name, address = pairs[0]
    if not address or any(c.isspace() for c in address):
        return None

    try:
        validated = validate_email(address, check_deliverability=False)
    except EmailNotValidError:
        return None

    return NormalizedEmail(name=name.strip() or None, address=validated.normalized)
