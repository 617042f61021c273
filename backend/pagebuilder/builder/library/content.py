from ..metadata import (
    ARRAY, COLOR, IMAGE_URL, LINK, NUMBER, SELECT, TEXT, TEXTAREA,
    ComponentMetadata, ComponentSchema, SchemaField,
)
from ..rendering import TemplateUnit

ALIGNMENT_OPTIONS = [
    {"label": "Left", "value": "left"},
    {"label": "Center", "value": "center"},
    {"label": "Right", "value": "right"},
]

HERO_TEMPLATE = """
<section class="component-hero hero-{{ config.height }}{% if edit_mode %} is-editing{% endif %}" data-component="hero" data-section-id="{{ section_id }}" style="{{ style|inline_style }};text-align:{{ config.alignment }}{% if config.backgroundImage %};background-image:url('{{ config.backgroundImage|safe_url('') }}'){% endif %}">
  <div class="hero-content">
    <h1 class="hero-title">{{ config.title }}</h1>
    {% if config.subtitle %}<p class="hero-subtitle">{{ config.subtitle }}</p>{% endif %}
    {% if config.buttonText %}<a class="hero-button" href="{{ config.buttonLink|safe_url }}">{{ config.buttonText }}</a>{% endif %}
  </div>
</section>
"""

TEXT_BLOCK_TEMPLATE = """
<section class="component-text-block{% if edit_mode %} is-editing{% endif %}" data-component="text-block" data-section-id="{{ section_id }}" style="{{ style|inline_style }};text-align:{{ config.alignment }}">
  {% if config.title %}<h2>{{ config.title }}</h2>{% endif %}
  <div class="text-content">{{ config.content }}</div>
</section>
"""

ABOUT_TEMPLATE = """
<section class="component-about image-{{ config.imagePosition }}{% if edit_mode %} is-editing{% endif %}" data-component="about-section" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <span class="eyebrow">{{ config.eyebrow }}</span>
  <h2>{{ config.title }}</h2>
  <p class="subtitle">{{ config.subtitle }}</p>
  <p>{{ config.content }}</p>
  <ul class="bullets">
    {% for bullet in config.bullets %}<li><i class="{{ bullet.icon }}"></i><strong>{{ bullet.title }}</strong> {{ bullet.description }}</li>{% endfor %}
  </ul>
  {% if config.imageUrl %}<img src="{{ config.imageUrl|safe_url('') }}" alt="{{ config.highlightText }}">{% endif %}
  {% if config.buttonText %}<a class="about-button" href="{{ config.buttonLink|safe_url }}">{{ config.buttonText }}</a>{% endif %}
</section>
"""

FEATURES_TEMPLATE = """
<section class="component-features{% if edit_mode %} is-editing{% endif %}" data-component="features-grid" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <h2 style="color:{{ config.titleColor }}">{{ config.title }}</h2>
  <p style="color:{{ config.subtitleColor }}">{{ config.subtitle }}</p>
  <div class="features-grid" style="gap:{{ config.gridGap }}">
    {% for feature in config.features %}
    <div class="feature-card" style="background:{{ config.cardBackground }}">
      <i class="{{ feature.icon }}"></i>
      <h3>{{ feature.title }}</h3>
      {% if feature.description %}<p>{{ feature.description }}</p>{% endif %}
    </div>
    {% endfor %}
  </div>
</section>
"""

STATS_TEMPLATE = """
<section class="component-stats{% if edit_mode %} is-editing{% endif %}" data-component="stats-section" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <span class="badge" style="color:{{ config.accentColor }}">{{ config.badgeText }}</span>
  <h2>{{ config.title }}</h2>
  <p>{{ config.subtitle }}</p>
  <div class="stats-container">
    {% for stat in config.stats %}<div class="stat-item"><span class="stat-value">{{ stat.value }}</span><span class="stat-label">{{ stat.label }}</span></div>{% endfor %}
  </div>
</section>
"""

FAQ_TEMPLATE = """
<section class="component-faq{% if edit_mode %} is-editing{% endif %}" data-component="faq" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <h2 style="color:{{ config.titleColor }}">{{ config.title }}</h2>
  <p style="color:{{ config.subtitleColor }}">{{ config.subtitle }}</p>
  {% for item in config['items'] %}
  <details class="faq-item" style="background:{{ config.cardBackground }}">
    <summary style="color:{{ config.questionColor }}">{{ item.question }}</summary>
    <p style="color:{{ config.answerColor }}">{{ item.answer }}</p>
  </details>
  {% endfor %}
</section>
"""

CTA_TEMPLATE = """
<section class="component-cta{% if edit_mode %} is-editing{% endif %}" data-component="cta-button" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  {% if config.badgeText %}<span class="badge" style="color:{{ config.accentColor }}">{{ config.badgeText }}</span>{% endif %}
  <h2>{{ config.title }}</h2>
  <p>{{ config.subtitle }}</p>
  <a class="cta-primary" href="{{ config.buttonLink|safe_url }}">{{ config.buttonText }}</a>
  {% if config.secondaryButtonText %}<a class="cta-secondary" href="{{ config.secondaryButtonLink|safe_url }}">{{ config.secondaryButtonText }}</a>{% endif %}
</section>
"""

HERO_METADATA = ComponentMetadata(
    "hero",
    "Hero Section",
    icon="🖼️",
    category="content",
    description="Large banner with title and call-to-action",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Find your ideal home", required=True),
            SchemaField("subtitle", "Subtitle", TEXT, "The best listings on the market"),
            SchemaField("backgroundImage", "Background image", IMAGE_URL, ""),
            SchemaField("buttonText", "Button text", TEXT, "View properties"),
            SchemaField("buttonLink", "Button link", LINK, "/properties"),
            SchemaField(
                "height",
                "Height",
                SELECT,
                "large",
                options=[
                    {"label": "Small (300px)", "value": "small"},
                    {"label": "Medium (400px)", "value": "medium"},
                    {"label": "Large (500px)", "value": "large"},
                    {"label": "Full screen", "value": "full"},
                ],
            ),
            SchemaField("alignment", "Alignment", SELECT, "center", options=ALIGNMENT_OPTIONS),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#004AAD"),
            SchemaField("textColor", "Text colour", COLOR, "#ffffff"),
            SchemaField("padding", "Padding", TEXT, "0", placeholder="e.g. 2rem or 20px"),
        ],
    ),
)

TEXT_BLOCK_METADATA = ComponentMetadata(
    "text-block",
    "Text Block",
    icon="📝",
    category="content",
    description="Free text with an optional heading",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Title"),
            SchemaField("content", "Content", TEXTAREA, "Your content here...", required=True),
            SchemaField("alignment", "Alignment", SELECT, "left", options=ALIGNMENT_OPTIONS),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "transparent"),
            SchemaField("textColor", "Text colour", COLOR, "#333333"),
            SchemaField("padding", "Padding", TEXT, "2rem"),
        ],
    ),
)

ABOUT_METADATA = ComponentMetadata(
    "about-section",
    "About",
    icon="🧭",
    category="content",
    description="Agency manifesto with value bullets and a photo",
    schema=ComponentSchema(
        fields=[
            SchemaField("eyebrow", "Eyebrow", TEXT, "Manifesto"),
            SchemaField("title", "Title", TEXT, "Your broker with a strategic eye"),
            SchemaField("subtitle", "Subtitle", TEXT, "Direct service, market data and focus on results."),
            SchemaField("content", "Body", TEXTAREA, "More than 12 years connecting families to the right homes."),
            SchemaField("imageUrl", "Photo URL", IMAGE_URL, ""),
            SchemaField(
                "bullets",
                "Value points",
                ARRAY,
                [
                    {"icon": "fa-solid fa-chart-line", "title": "Market insight", "description": "Weekly analysis to price with confidence."},
                    {"icon": "fa-solid fa-star", "title": "Premium curation", "description": "A short list of highly liquid properties."},
                ],
                item_fields=[
                    SchemaField("icon", "Icon", TEXT),
                    SchemaField("title", "Short title", TEXT),
                    SchemaField("description", "Short description", TEXT),
                ],
            ),
            SchemaField("buttonText", "Button text", TEXT, "Meet the broker"),
            SchemaField("buttonLink", "Button link", LINK, "/about"),
            SchemaField("highlightText", "Photo caption", TEXT, "One-to-one service from start to finish"),
            SchemaField(
                "imagePosition",
                "Photo position",
                SELECT,
                "right",
                options=[{"label": "Right", "value": "right"}, {"label": "Left", "value": "left"}],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", TEXT, "#ffffff"),
            SchemaField("padding", "Padding", TEXT, "5rem 0"),
        ],
    ),
)

FEATURES_METADATA = ComponentMetadata(
    "features-grid",
    "Features",
    icon="⭐",
    category="content",
    description="Grid of selling points",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Why choose us?"),
            SchemaField("subtitle", "Subtitle", TEXT, "Advantages of working with us"),
            SchemaField("titleColor", "Title colour", COLOR, "#1a202c"),
            SchemaField("subtitleColor", "Subtitle colour", COLOR, "#718096"),
            SchemaField("cardBackground", "Card background", COLOR, "#ffffff"),
            SchemaField("gridGap", "Card spacing", TEXT, "2rem"),
            SchemaField(
                "features",
                "Features",
                ARRAY,
                [
                    {"icon": "fas fa-shield-alt", "title": "Total security"},
                    {"icon": "fas fa-clock", "title": "24/7 support"},
                    {"icon": "fas fa-star", "title": "Free valuation"},
                ],
                item_fields=[
                    SchemaField("icon", "Icon", TEXT),
                    SchemaField("title", "Short title", TEXT),
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#ffffff"),
            SchemaField("padding", "Padding", TEXT, "5rem 0"),
        ],
    ),
)

STATS_METADATA = ComponentMetadata(
    "stats-section",
    "Social Proof",
    icon="📊",
    category="content",
    description="Headline numbers",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Results that speak"),
            SchemaField("subtitle", "Subtitle", TEXT, "Numbers behind our track record"),
            SchemaField("badgeText", "Badge", TEXT, "Credibility"),
            SchemaField("accentColor", "Accent colour", COLOR, "#0ea5e9"),
            SchemaField(
                "stats",
                "Stat cards",
                ARRAY,
                [
                    {"value": "1200+", "label": "Active listings", "description": "Exclusive portfolio"},
                    {"value": "97%", "label": "Satisfaction", "description": "Verified reviews"},
                ],
                item_fields=[
                    SchemaField("value", "Value", TEXT),
                    SchemaField("label", "Label", TEXT),
                    SchemaField("description", "Description", TEXT),
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", TEXT, "linear-gradient(135deg, #0f172a 0%, #1e3a8a 100%)"),
            SchemaField("textColor", "Text colour", COLOR, "#f8fafc"),
            SchemaField("padding", "Padding", TEXT, "5rem 0"),
        ],
    ),
)

FAQ_METADATA = ComponentMetadata(
    "faq",
    "FAQ Section",
    icon="❓",
    category="content",
    description="Questions and answers",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Frequently asked questions"),
            SchemaField("subtitle", "Subtitle", TEXT, "Answers about our services"),
            SchemaField("titleColor", "Title colour", COLOR, "#1a202c"),
            SchemaField("subtitleColor", "Subtitle colour", COLOR, "#718096"),
            SchemaField("questionColor", "Question colour", COLOR, "#2d3748"),
            SchemaField("answerColor", "Answer colour", COLOR, "#4a5568"),
            SchemaField("cardBackground", "Card background", COLOR, "#ffffff"),
            SchemaField(
                "items",
                "Questions and answers",
                ARRAY,
                [
                    {"question": "How does buying work?", "answer": "We guide you from the first visit to the signed contract."},
                    {"question": "Do you help with financing?", "answer": "Yes, we partner with the main banks."},
                ],
                item_fields=[
                    SchemaField("question", "Question", TEXT),
                    SchemaField("answer", "Answer", TEXTAREA),
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#f9fafb"),
            SchemaField("padding", "Padding", TEXT, "4rem 0"),
        ],
    ),
)

CTA_METADATA = ComponentMetadata(
    "cta-button",
    "Call to Action",
    icon="🚀",
    category="content",
    description="Closing call to action with two buttons",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Ready to close your next deal?"),
            SchemaField("subtitle", "Subtitle", TEXT, "Book a consultation and see off-market opportunities."),
            SchemaField("buttonText", "Primary button text", TEXT, "Book a consultation"),
            SchemaField("buttonLink", "Primary button link", LINK, "/contact"),
            SchemaField("secondaryButtonText", "Secondary button text", TEXT, "View properties"),
            SchemaField("secondaryButtonLink", "Secondary button link", LINK, "/properties"),
            SchemaField("overlayColor", "Overlay colour", COLOR, "#0f172a"),
            SchemaField("overlayOpacity", "Overlay opacity (0 to 1)", NUMBER, 0.6, min=0, max=1),
            SchemaField("accentColor", "Accent colour", COLOR, "#0ea5e9"),
            SchemaField("badgeText", "Badge", TEXT, "Last chance"),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", TEXT, "linear-gradient(135deg, #0f172a 0%, #1e3a8a 100%)"),
            SchemaField("textColor", "Text colour", COLOR, "#f8fafc"),
            SchemaField("padding", "Padding", TEXT, "5rem 0"),
        ],
    ),
)

COMPONENTS = [
    (TemplateUnit("hero", HERO_TEMPLATE), HERO_METADATA),
    (TemplateUnit("text-block", TEXT_BLOCK_TEMPLATE), TEXT_BLOCK_METADATA),
    (TemplateUnit("about-section", ABOUT_TEMPLATE), ABOUT_METADATA),
    (TemplateUnit("features-grid", FEATURES_TEMPLATE), FEATURES_METADATA),
    (TemplateUnit("stats-section", STATS_TEMPLATE), STATS_METADATA),
    (TemplateUnit("faq", FAQ_TEMPLATE), FAQ_METADATA),
    (TemplateUnit("cta-button", CTA_TEMPLATE), CTA_METADATA),
]
