from ..metadata import (
    ARRAY, CHECKBOX, COLOR, NUMBER, SELECT, TEXT,
    ComponentMetadata, ComponentSchema, SchemaField,
)
from ..rendering import TemplateUnit

PROPERTY_GRID_TEMPLATE = """
<section class="component-property-grid{% if edit_mode %} is-editing{% endif %}" data-component="property-grid" data-section-id="{{ section_id }}" data-limit="{{ config.limit }}" data-sort="{{ config.sortBy }}" data-featured="{{ 'true' if config.showFeatured else 'false' }}" style="{{ style|inline_style }}">
  {% if config.showFilters %}<div class="property-filters" data-role="filters"></div>{% endif %}
  <div class="properties-container" data-role="property-grid-list" style="grid-template-columns:repeat({{ config.columns }}, minmax(0, 1fr))">
    {% if edit_mode %}<div class="component-placeholder"><strong>Property Grid</strong> <span>up to {{ config.limit }} listings</span></div>{% endif %}
  </div>
</section>
"""

SEARCH_BAR_TEMPLATE = """
<section class="component-search-bar search-{{ config.orientation }}{% if edit_mode %} is-editing{% endif %}" data-component="search-bar" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  <form data-role="search-form">
    <input type="text" data-field="term" placeholder="{{ config.placeholder }}">
    {% for field in config.fields %}<select data-field="{{ field }}"></select>{% endfor %}
    <button type="submit">{{ config.buttonText }}</button>
  </form>
</section>
"""

PROPERTY_GRID_METADATA = ComponentMetadata(
    "property-grid",
    "Property Grid",
    icon="🏘️",
    category="properties",
    description="Listing cards pulled from the property catalogue",
    schema=ComponentSchema(
        fields=[
            SchemaField("limit", "Number of listings", NUMBER, 6, min=1, max=50),
            SchemaField("showFeatured", "Featured only", CHECKBOX, True),
            SchemaField(
                "columns",
                "Columns",
                SELECT,
                3,
                options=[
                    {"label": "2 columns", "value": 2},
                    {"label": "3 columns", "value": 3},
                    {"label": "4 columns", "value": 4},
                ],
            ),
            SchemaField("showFilters", "Show filters", CHECKBOX, False),
            SchemaField(
                "sortBy",
                "Sort by",
                SELECT,
                "date",
                options=[
                    {"label": "Newest", "value": "date"},
                    {"label": "Highest price", "value": "price"},
                    {"label": "Largest area", "value": "area"},
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "transparent"),
            SchemaField("padding", "Padding", TEXT, "2rem"),
        ],
    ),
)

SEARCH_BAR_METADATA = ComponentMetadata(
    "search-bar",
    "Search Bar",
    icon="🔎",
    category="properties",
    description="Property search form",
    schema=ComponentSchema(
        fields=[
            SchemaField("fields", "Visible filters", ARRAY, ["type", "city", "priceRange", "bedrooms"]),
            SchemaField("placeholder", "Placeholder", TEXT, "Search properties..."),
            SchemaField("buttonText", "Button text", TEXT, "Search"),
            SchemaField(
                "orientation",
                "Orientation",
                SELECT,
                "horizontal",
                options=[
                    {"label": "Horizontal", "value": "horizontal"},
                    {"label": "Vertical", "value": "vertical"},
                ],
            ),
        ],
        style_fields=[
            SchemaField("backgroundColor", "Background", COLOR, "#ffffff"),
            SchemaField("padding", "Padding", TEXT, "2rem"),
        ],
    ),
)

COMPONENTS = [
    (TemplateUnit("property-grid", PROPERTY_GRID_TEMPLATE), PROPERTY_GRID_METADATA),
    (TemplateUnit("search-bar", SEARCH_BAR_TEMPLATE), SEARCH_BAR_METADATA),
]
