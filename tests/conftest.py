"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cvpress.models.cv import CvDocModel, CvSkills, XpEntry
from cvpress.models.letter import LmModel
from cvpress.theme import PdfColors, make_colors

SAMPLE_PROFILE = (
    "Ingénieur cloud et sécurité avec huit ans d'expérience dans la conception "
    "d'infrastructures hybrides, l'automatisation des déploiements et la sécurisation "
    "des environnements de production. J'accompagne les équipes de développement dans "
    "l'adoption des bonnes pratiques DevSecOps, la mise en place de pipelines CI/CD "
    "fiables et la supervision des services critiques. Habitué aux contextes exigeants, "
    "je privilégie des solutions simples, documentées et mesurables, au service de la "
    "disponibilité et de la conformité réglementaire."
)


def heavy_bullets(entry: int) -> list[str]:
    return [
        f"Pilotage du chantier {entry}.{i} : migration des services vers Kubernetes "
        f"et réduction des coûts d'hébergement de {10 + i} %"
        for i in range(6)
    ]


@pytest.fixture
def colors() -> PdfColors:
    return make_colors("#2563eb")


@pytest.fixture
def sample_cv() -> CvDocModel:
    return CvDocModel(
        name="Camille Martin",
        title="Ingénieure Cloud & Sécurité",
        contact_line="Paris | camille.martin@example.com | 06 12 34 56 78",
        profile=SAMPLE_PROFILE,
        skills=CvSkills(
            cloud=["AWS", "Azure"],
            security=["ISO 27001", "IAM"],
            systems=["Linux", "TCP/IP"],
            automation=["Terraform", "Ansible"],
            tools=["GitLab CI", "Grafana"],
            soft=["Pédagogie"],
        ),
        xp=[
            XpEntry(
                company="Acme Cloud",
                city="Paris",
                role="Ingénieure DevSecOps",
                dates="2021 – 2025",
                bullets=[
                    "Industrialisation de 40 pipelines CI/CD",
                    "Durcissement des clusters Kubernetes",
                ],
            ),
            XpEntry(
                company="Globex",
                city="Lyon",
                role="Administratrice systèmes",
                dates="2017 – 2021",
                bullets=["Supervision de 300 serveurs Linux"],
            ),
        ],
        education=["2017 · Master Informatique – Université de Lyon"],
        certs="AWS Solutions Architect, CKA",
        lang_line="Français (Natif), Anglais (Courant)",
        hobbies=["Escalade", "Photographie"],
    )


@pytest.fixture
def heavy_cv(sample_cv) -> CvDocModel:
    xp = [
        XpEntry(
            company=f"Entreprise {i}",
            city="Paris",
            role="Ingénieure cloud",
            dates=f"{2010 + i} – {2011 + i}",
            bullets=heavy_bullets(i),
        )
        for i in range(8)
    ]
    return sample_cv.model_copy(update={"xp": xp})


@pytest.fixture
def empty_cv() -> CvDocModel:
    return CvDocModel()


@pytest.fixture
def sample_letter() -> LmModel:
    return LmModel(
        lang="fr",
        name="Camille Martin",
        contact_lines=["Paris", "camille.martin@example.com"],
        service="Service recrutement",
        company_name="Acme Cloud",
        company_addr="12 rue de la Paix\n75002 Paris",
        city="Paris",
        date_str="3 mars 2025",
        subject="Candidature : Ingénieure cloud",
        salutation="Madame, Monsieur,",
        body=(
            "Votre annonce a retenu toute mon attention.\n\n"
            "Depuis quatre ans, je conçois et sécurise des plateformes cloud.\n\n"
            "Je serais ravie d'échanger avec vous lors d'un entretien."
        ),
        closing="Veuillez agréer mes salutations distinguées.",
        signature="Camille Martin",
    )


@pytest.fixture
def fake_measure():
    """Deterministic text metrics: every character is half the font size wide."""

    def measure(text: str, style: str, size: float) -> float:
        return len(text) * size * 0.5

    return measure
