"""Built-in section registry table used when no configuration overrides it.

The values mirror what the hosted site builder ships: every section type a
page can hold, the layouts that decide which of them are required, and the
seed collections that are copied into a section the first time a user edits
them.
"""

from __future__ import annotations

import typing as typ

MULTI_INSTANCE_TYPES: tuple[str, ...] = ("richText",)

SECTION_TYPES: dict[str, dict[str, typ.Any]] = {
    "hero": {
        "label": "Hero",
        "icon": "🦸",
        "default_data": {
            "headline": "Welcome to Our Site",
            "subheadline": "We help you grow your business",
            "alignment": "center",
            "ctaText": "Get Started",
            "ctaLink": "#",
        },
    },
    "header": {
        "label": "Header",
        "icon": "📰",
        "default_data": {"headline": "", "subheadline": ""},
    },
    "text": {
        "label": "Text Block",
        "icon": "📄",
        "default_data": {"content": "<p>Write your content here...</p>"},
    },
    "richText": {
        "label": "Rich Text",
        "icon": "📝",
        "default_data": {"headline": "", "content": ""},
    },
    "image": {"label": "Image", "icon": "🖼️", "default_data": {"url": "", "alt": ""}},
    "icon": {"label": "Icon", "icon": "⭐", "default_data": {"icon": "Star"}},
    "gallery": {
        "label": "Image Gallery",
        "icon": "🖼️",
        "default_data": {"columns": 3, "items": []},
    },
    "features": {
        "label": "Features",
        "icon": "⚡",
        "default_data": {"headline": "Our Features", "description": "", "features": []},
    },
    "featured": {
        "label": "Featured Items",
        "icon": "⭐",
        "default_data": {"headline": "Featured", "featuredItems": []},
    },
    "categories": {
        "label": "Categories",
        "icon": "📂",
        "default_data": {"headline": "Categories", "categories": []},
    },
    "cta": {
        "label": "Call to Action",
        "icon": "📢",
        "default_data": {
            "headline": "Ready to start?",
            "description": "Join us today",
            "ctaText": "Sign Up Now",
            "ctaLink": "/signup",
        },
    },
    "testimonials": {
        "label": "Testimonials",
        "icon": "💬",
        "default_data": {
            "headline": "What Our Clients Say",
            "items": [{"quote": "Amazing service!", "author": "Jane Doe", "role": "CEO"}],
        },
    },
    "form": {
        "label": "Form",
        "icon": "📝",
        "default_data": {"headline": "Contact Us", "fields": []},
    },
    "pricing": {
        "label": "Pricing",
        "icon": "💰",
        "default_data": {"headline": "Pricing", "items": []},
    },
    "team": {"label": "Team", "icon": "👥", "default_data": {"headline": "Our Team", "items": []}},
    "mission": {
        "label": "Mission",
        "icon": "🎯",
        "default_data": {"headline": "Our Mission", "content": ""},
    },
    "values": {
        "label": "Values",
        "icon": "💎",
        "default_data": {"headline": "Our Values", "items": []},
    },
    "specifications": {
        "label": "Specifications",
        "icon": "📋",
        "default_data": {"headline": "Specifications", "items": []},
    },
    "businessInfo": {
        "label": "Business Info",
        "icon": "🏢",
        "default_data": {"headline": "Contact Info", "address": "", "phone": "", "email": ""},
    },
    "faq": {
        "label": "FAQ",
        "icon": "❓",
        "default_data": {"headline": "Frequently Asked Questions", "faqs": []},
    },
    "plant_showcase": {"label": "Plant Showcase", "icon": "🌸"},
    "plant_grid": {"label": "Plant Grid", "icon": "🪴"},
    "plant_care_guide": {"label": "Care Guide", "icon": "🌱"},
    "seasonal_tips": {"label": "Seasonal Tips", "icon": "☀️"},
    "plant_categories": {"label": "Plant Categories", "icon": "📂"},
    "growing_conditions": {"label": "Growing Conditions", "icon": "🌧️"},
    "plant_comparison": {"label": "Plant Comparison", "icon": "⚖️"},
    "care_calendar": {"label": "Care Calendar", "icon": "📅"},
    "plant_benefits": {"label": "Plant Benefits", "icon": "💚"},
    "soil_guide": {"label": "Soil Guide", "icon": "🟤"},
}

DEFAULT_FEATURED_ITEMS: list[dict[str, str]] = [
    {
        "id": "featured-1",
        "title": "Golden Pothos",
        "tag": "houseplants",
        "image": "/images/golden-pothos.jpg",
        "link": "/plants/golden-pothos",
    },
    {
        "id": "featured-2",
        "title": "Snake Plant",
        "tag": "easy care",
        "image": "/images/snake-plant.jpg",
        "link": "/plants/snake-plant",
    },
    {
        "id": "featured-3",
        "title": "Monstera Deliciosa",
        "tag": "trending",
        "image": "/images/fiddle-leaf-fig.jpg",
        "link": "/plants/monstera",
    },
    {
        "id": "featured-4",
        "title": "Japanese Maple",
        "tag": "outdoor",
        "image": "/images/japanese-maple.jpg",
        "link": "/plants/japanese-maple",
    },
]

SEEDS: dict[str, list[dict[str, typ.Any]]] = {
    "featuredItems": DEFAULT_FEATURED_ITEMS,
}

LAYOUTS: dict[str, dict[str, typ.Any]] = {
    "landing": {
        "required": ["hero"],
        "optional": ["featured", "categories", "features", "richText", "cta"],
        "default_sections": {
            "hero": {
                "type": "hero",
                "data": {"content": "", "alignment": "center"},
                "settings": {"backgroundColor": "gradient"},
            },
            "featured": {
                "type": "featured",
                "data": {
                    "headline": "Featured Plants This Season",
                    "viewAllText": "View All Plants",
                    "viewAllLink": "/plants",
                },
            },
            "features": {
                "type": "features",
                "data": {"headline": "Essential Plant Care Features", "features": []},
                "settings": {"backgroundColor": "default"},
            },
            "cta": {
                "type": "cta",
                "data": {
                    "headline": "Growing Together, Sustainably",
                    "ctaText": "Shop Plants",
                    "ctaLink": "/",
                },
                "settings": {"backgroundColor": "primary"},
            },
        },
    },
    "blog": {
        "required": ["header", "content"],
        "optional": ["related"],
        "default_sections": {
            "header": {"type": "hero", "data": {"content": "", "alignment": "left"}},
            "content": {"type": "richText", "data": {"content": ""}},
            "related": {"type": "features", "data": {"items": [], "columns": 3}},
        },
    },
    "portfolio": {
        "required": ["header", "gallery"],
        "optional": ["description", "details"],
        "default_sections": {
            "header": {"type": "hero", "data": {"content": "", "alignment": "center"}},
            "description": {"type": "richText", "data": {"content": ""}},
            "details": {"type": "features", "data": {"items": [], "columns": 2}},
        },
    },
    "about": {
        "required": [],
        "optional": ["header", "values", "features", "richText", "cta"],
        "default_sections": {},
    },
    "product": {
        "required": ["header", "features"],
        "optional": ["pricing", "specifications"],
        "default_sections": {
            "header": {"type": "hero", "data": {"content": ""}},
        },
    },
    "contact": {
        "required": [],
        "optional": ["header", "businessInfo", "richText", "faq"],
        "default_sections": {
            "faq": {
                "type": "faq",
                "data": {"headline": "Frequently Asked Questions", "faqs": []},
                "settings": {"backgroundColor": "alternate"},
            },
        },
    },
    "other": {
        "required": [],
        "optional": [
            "hero",
            "text",
            "richText",
            "image",
            "icon",
            "gallery",
            "features",
            "featured",
            "categories",
            "cta",
            "testimonials",
            "form",
            "pricing",
            "values",
            "specifications",
        ],
        "default_sections": {},
    },
    "plant_shop": {
        "required": ["hero", "featured_plants"],
        "optional": ["plant_categories", "seasonal_tips", "care_guide", "testimonials"],
        "default_sections": {
            "featured_plants": {"type": "plant_showcase", "data": {}},
            "care_guide": {"type": "plant_care_guide", "data": {}},
        },
    },
    "plant_care": {
        "required": ["header", "care_instructions"],
        "optional": ["growing_conditions", "seasonal_calendar", "troubleshooting"],
        "default_sections": {
            "care_instructions": {"type": "plant_care_guide", "data": {}},
            "seasonal_calendar": {"type": "care_calendar", "data": {}},
            "troubleshooting": {"type": "faq", "data": {"faqs": []}},
        },
    },
    "plant_catalog": {
        "required": ["header", "plant_grid"],
        "optional": ["filters", "plant_comparison", "care_benefits"],
        "default_sections": {
            "filters": {"type": "plant_categories", "data": {}},
            "care_benefits": {"type": "plant_benefits", "data": {}},
        },
    },
}

__all__ = [
    "DEFAULT_FEATURED_ITEMS",
    "LAYOUTS",
    "MULTI_INSTANCE_TYPES",
    "SECTION_TYPES",
    "SEEDS",
]
