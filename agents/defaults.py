"""Static, niche-aware default site used when generation yields nothing."""

from config.media import detect_niche, hero_image, gallery_images, avatar_images, NICHE_LABELS
from core.state import Artifact
from utils.folder_naming import brand_name
from utils.template_engine import render_set

TEMPLATE_SET = "site"

# (template name, target path)
DEFAULT_FILES = [
    ("favicon.svg", "public/favicon.svg"),
    ("robots.txt", "public/robots.txt"),
    ("index.css", "src/index.css"),
    ("App.tsx", "src/App.tsx"),
    ("Index.tsx", "src/pages/Index.tsx"),
    ("Navbar.tsx", "src/components/layout/Navbar.tsx"),
    ("Hero.tsx", "src/components/Hero.tsx"),
    ("Features.tsx", "src/components/Features.tsx"),
    ("Gallery.tsx", "src/components/Gallery.tsx"),
    ("Testimonials.tsx", "src/components/Testimonials.tsx"),
    ("CTA.tsx", "src/components/CTA.tsx"),
    ("Footer.tsx", "src/components/layout/Footer.tsx"),
]


def template_variables(prompt):
    niche = detect_niche(prompt)
    brand = brand_name(prompt)
    variables = {
        "brand": brand,
        "title": brand,
        "initial": brand[:1].upper() or "S",
        "niche_label": NICHE_LABELS.get(niche, "website").capitalize(),
        "hero_url": hero_image(niche),
    }
    gallery = gallery_images(niche, 6)
    # Short niche lists repeat from the start
    for i in range(6):
        variables[f"gallery_{i}"] = gallery[i % len(gallery)]
    for i, url in enumerate(avatar_images(3)):
        variables[f"avatar_{i}"] = url
    return variables


def default_artifacts(prompt):
    """Render the full default site for a prompt."""
    return [
        Artifact(path=path, content=content, operation="create")
        for path, content in render_set(TEMPLATE_SET, DEFAULT_FILES, template_variables(prompt))
    ]
