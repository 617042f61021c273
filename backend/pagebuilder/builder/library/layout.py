from ..metadata import CHECKBOX, COLOR, TEXT, TEXTAREA, ComponentMetadata, ComponentSchema, SchemaField
from ..rendering import TemplateUnit

DIVIDER_TEMPLATE = """
<div class="component-divider" data-component="divider" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <hr style="border-top:{{ config.thickness }} {{ config.style }} {{ config.color }}">
</div>
"""

SPACER_TEMPLATE = """
<div class="component-spacer{% if edit_mode %} is-editing{% endif %}" data-component="spacer" data-section-id="{{ section_id }}" style="height:{{ config.height }}"></div>
"""

CUSTOM_CODE_TEMPLATE = """
<section class="component-custom-code" data-component="custom-code" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  {% if config.css %}<style>{{ config.css|safe_css }}</style>{% endif %}
  {{ config.html|safe_html(config.enableJs) }}
  {% if config.enableJs and config.js and not edit_mode %}<script>{{ config.js|safe_html(True) }}</script>{% endif %}
</section>
"""

DIVIDER_METADATA = ComponentMetadata(
    "divider",
    "Divider",
    icon="➖",
    category="layout",
    description="Horizontal rule",
    schema=ComponentSchema(
        fields=[
            SchemaField("color", "Colour", COLOR, "#e0e0e0"),
            SchemaField("thickness", "Thickness", TEXT, "1px"),
        ],
        style_fields=[
            SchemaField("margin", "Margin", TEXT, "2rem 0"),
        ],
    ),
    default_config={"style": "solid"},
)

SPACER_METADATA = ComponentMetadata(
    "spacer",
    "Spacer",
    icon="↕️",
    category="layout",
    description="Vertical whitespace",
    schema=ComponentSchema(
        fields=[
            SchemaField("height", "Height", TEXT, "2rem"),
        ],
    ),
)

CUSTOM_CODE_METADATA = ComponentMetadata(
    "custom-code",
    "Custom Code",
    icon="💻",
    category="layout",
    description="Hand-written HTML and CSS",
    schema=ComponentSchema(
        fields=[
            SchemaField(
                "html",
                "HTML",
                TEXTAREA,
                '<div class="custom-widget"><h3>Custom Widget</h3><p>Your custom content here</p></div>',
            ),
            SchemaField(
                "css",
                "CSS",
                TEXTAREA,
                ".custom-widget { background: #f0f0f0; padding: 20px; border-radius: 8px; text-align: center; }",
            ),
            SchemaField("js", "JavaScript", TEXTAREA, ""),
            SchemaField("enableJs", "Enable JavaScript (admin only)", CHECKBOX, False),
        ],
    ),
    default_style={"padding": "2rem 1rem"},
)

COMPONENTS = [
    (TemplateUnit("divider", DIVIDER_TEMPLATE), DIVIDER_METADATA),
    (TemplateUnit("spacer", SPACER_TEMPLATE), SPACER_METADATA),
    (TemplateUnit("custom-code", CUSTOM_CODE_TEMPLATE), CUSTOM_CODE_METADATA),
]
