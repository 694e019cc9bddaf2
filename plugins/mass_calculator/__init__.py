"""Mixture mass calculator plugin."""

manifest = {
    "title": "Mixture Mass Calculator",
    "summary": "Sum element masses given in grams, prefixed grams, pounds or moles with exact decimal arithmetic.",
    "blueprint": "mass_calculator",
    "category": "General Utilities",
    "icon": "img/MassCalculator_icon.png",
}


__all__ = ["manifest"]
