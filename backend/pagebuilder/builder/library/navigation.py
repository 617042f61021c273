from ..metadata import ARRAY, CHECKBOX, COLOR, LINK, TEXT, ComponentMetadata, ComponentSchema, SchemaField
from ..rendering import TemplateUnit

HEADER_TEMPLATE = """
<header class="component-header{% if edit_mode %} is-editing{% endif %}" data-component="header" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <div class="navbar">
    <div class="navbar-brand">{{ config.logo }}</div>
    <ul class="navbar-nav">
      {% for item in config.navigation %}<li><a href="{{ item.link|safe_url }}">{{ item.label }}</a></li>{% endfor %}
    </ul>
    {% if config.showSearch %}<form class="navbar-search"><input type="search" placeholder="Search"></form>{% endif %}
  </div>
</header>
"""

FOOTER_TEMPLATE = """
<footer class="component-footer{% if edit_mode %} is-editing{% endif %}" data-component="footer" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <div class="footer-columns">
    {% for column in config.columns %}
    <div class="footer-column">
      <h4>{{ column.title }}</h4>
      <ul>{% for link in column.links %}<li><a href="{{ link.link|safe_url }}">{{ link.label }}</a></li>{% endfor %}</ul>
    </div>
    {% endfor %}
  </div>
  <div class="footer-bottom">{{ config.copyrightText }}</div>
</footer>
"""

HEADER_METADATA = ComponentMetadata(
    "header",
    "Header",
    icon="📄",
    category="navigation",
    description="Top navigation bar with logo and menu",
    schema=ComponentSchema(
        fields=[
            SchemaField("logo", "Logo / Name", TEXT, "Real Estate", required=True),
            SchemaField("showSearch", "Show search", CHECKBOX, True),
            SchemaField(
                "navigation",
                "Navigation menu",
                ARRAY,
                [
                    {"label": "Home", "link": "/"},
                    {"label": "Properties", "link": "/properties"},
                    {"label": "Contact", "link": "/contact"},
                ],
                item_fields=[
                    SchemaField("label", "Text", TEXT, required=True),
                    SchemaField("link", "Link", LINK, required=True),
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#ffffff"),
            SchemaField("textColor", "Text colour", COLOR, "#333333"),
        ],
    ),
)

FOOTER_METADATA = ComponentMetadata(
    "footer",
    "Footer",
    icon="📄",
    category="navigation",
    description="Page footer with link columns",
    schema=ComponentSchema(
        fields=[
            SchemaField("copyrightText", "Copyright text", TEXT, "© 2026 All rights reserved"),
            SchemaField(
                "columns",
                "Link columns",
                ARRAY,
                [{"title": "Company", "links": [{"label": "About", "link": "#"}]}],
                item_fields=[SchemaField("title", "Title", TEXT)],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#1a1a1a"),
            SchemaField("textColor", "Text colour", COLOR, "#ffffff"),
        ],
    ),
)

COMPONENTS = [
    (TemplateUnit("header", HEADER_TEMPLATE), HEADER_METADATA),
    (TemplateUnit("footer", FOOTER_TEMPLATE), FOOTER_METADATA),
]
