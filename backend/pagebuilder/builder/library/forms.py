from typing import Any, Dict

from ..metadata import COLOR, NUMBER, OBJECT, SELECT, TEXT, ComponentMetadata, ComponentSchema, SchemaField
from ..rendering import TemplateUnit, renderer


NEWSLETTER_TEMPLATE = """
<section class="component-newsletter{% if edit_mode %} is-editing{% endif %}" data-component="newsletter" data-section-id="{{ section_id }}" style="background:{{ config.background }};{{ style|inline_style }}">
  <h2 style="color:{{ config.titleColor }}">{{ config.title }}</h2>
  <p style="color:{{ config.subtitleColor }}">{{ config.subtitle }}</p>
  <form class="newsletter-form">
    <input type="email" placeholder="{{ config.inputPlaceholder }}">
    <button type="submit" style="background:{{ config.buttonBackground }};color:{{ config.buttonColor }}">{{ config.buttonText }}</button>
  </form>
</section>
"""

NEWSLETTER_METADATA = ComponentMetadata(
    "newsletter",
    "Newsletter",
    icon="📧",
    category="forms",
    description="Email capture form",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Stay up to date"),
            SchemaField("subtitle", "Subtitle", TEXT, "New listings and exclusive opportunities in your inbox"),
            SchemaField("inputPlaceholder", "Input placeholder", TEXT, "Your best email"),
            SchemaField("buttonText", "Button text", TEXT, "Subscribe"),
            SchemaField("titleColor", "Title colour", COLOR, "white"),
            SchemaField("subtitleColor", "Subtitle colour", COLOR, "white"),
            SchemaField("buttonBackground", "Button background", COLOR, "white"),
            SchemaField("buttonColor", "Button text colour", COLOR, "#667eea"),
            SchemaField("background", "Section background", TEXT, "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"),
        ],
        style_fields=[
            SchemaField("padding", "Padding", TEXT, "4rem 0"),
        ],
    ),
)

CURRENCY_SYMBOLS = {"BRL": "R$", "USD": "$", "EUR": "€"}

MORTGAGE_LABELS = {
    "propertyValue": "Property value",
    "downPayment": "Down payment",
    "interestRate": "Interest rate (% per year)",
    "loanTerm": "Term (years)",
    "monthlyPayment": "Monthly payment",
    "financedAmount": "Financed amount",
    "totalInterest": "Total interest",
    "totalAmount": "Total to pay",
}


def _number(value, default):
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def amortize(financed: float, annual_rate: float, years: float) -> Dict[str, float]:
    """
    Fixed-payment (Price) schedule: M = P * r(1+r)^n / ((1+r)^n - 1).
    Nothing is financed when the down payment covers the price.
    """
    payments = int(round(years * 12))
    if financed <= 0 or payments <= 0:
        return {"monthlyPayment": 0.0, "financedAmount": max(financed, 0.0), "totalInterest": 0.0, "totalAmount": 0.0}

    rate = annual_rate / 100 / 12
    if rate == 0:
        payment = financed / payments
    else:
        growth = (1 + rate) ** payments
        payment = financed * rate * growth / (growth - 1)

    total = payment * payments
    return {
        "monthlyPayment": payment,
        "financedAmount": financed,
        "totalInterest": total - financed,
        "totalAmount": total,
    }


def mortgage_quote(config: Dict[str, Any]) -> Dict[str, Any]:
    property_value = _number(config.get("defaultPropertyValue"), 300000.0)
    down_payment = _number(config.get("defaultDownPayment"), 60000.0)
    interest_rate = _number(config.get("defaultInterestRate"), 9.5)
    loan_term = _number(config.get("defaultLoanTerm"), 30.0)

    labels = dict(MORTGAGE_LABELS)
    custom = config.get("labels")
    if isinstance(custom, dict):
        labels.update({key: value for key, value in custom.items() if value})

    return {
        "propertyValue": property_value,
        "downPayment": down_payment,
        "interestRate": interest_rate,
        "loanTerm": loan_term,
        "labels": labels,
        "results": amortize(property_value - down_payment, interest_rate, loan_term),
    }


def format_currency(value: Any, currency: Any = "BRL") -> str:
    symbol = CURRENCY_SYMBOLS.get(str(currency), str(currency))
    return f"{symbol} {float(value or 0):,.2f}"


renderer.env.globals["mortgage_quote"] = mortgage_quote
renderer.env.filters["currency"] = format_currency

MORTGAGE_CALCULATOR_TEMPLATE = """
{% set quote = mortgage_quote(config) %}
<section class="component-mortgage-calculator{% if edit_mode %} is-editing{% endif %}" data-component="mortgage-calculator" data-section-id="{{ section_id }}" style="{{ style|inline_style }}">
  {% if config.title %}<h2 style="color:{{ config.titleColor }}">{{ config.title }}</h2>{% endif %}
  {% if config.subtitle %}<p class="subtitle" style="color:{{ config.subtitleColor }}">{{ config.subtitle }}</p>{% endif %}
  <div class="calculator-content" style="background:{{ config.contentBackground }}">
    <div class="calculator-inputs">
      {% for key, step in [("propertyValue", 10000), ("downPayment", 5000), ("interestRate", 0.1), ("loanTerm", 1)] %}
      <div class="input-group">
        <label style="color:{{ config.labelColor }}">{{ quote.labels[key] }}</label>
        <input type="number" name="{{ key }}" min="0" step="{{ step }}" value="{{ quote[key] }}" style="border:2px solid {{ config.inputBorderColor }};background:{{ config.inputBackground }};color:{{ config.inputColor }}">
      </div>
      {% endfor %}
    </div>
    {% if quote.results.monthlyPayment > 0 %}
    <div class="calculator-results">
      {% for key in ["monthlyPayment", "financedAmount", "totalInterest", "totalAmount"] %}
      {% if loop.first %}
      <div class="result-item highlight" style="background:{{ config.primaryColor }};color:{{ config.highlightTextColor }}">
      {% else %}
      <div class="result-item" style="background:{{ config.resultBackground }};color:{{ config.resultTextColor }}">
      {% endif %}
        <span class="label">{{ quote.labels[key] }}</span>
        <span class="value" data-result="{{ key }}">{{ quote.results[key]|currency(config.currency) }}</span>
      </div>
      {% endfor %}
    </div>
    {% endif %}
  </div>
</section>
"""

MORTGAGE_CALCULATOR_METADATA = ComponentMetadata(
    "mortgage-calculator",
    "Mortgage Calculator",
    icon="🧮",
    category="forms",
    description="Real estate financing calculator",
    schema=ComponentSchema(
        fields=[
            SchemaField("title", "Title", TEXT, "Financing calculator"),
            SchemaField("subtitle", "Subtitle", TEXT, "Simulate the instalments of your home loan"),
            SchemaField("titleColor", "Title colour", COLOR, "#1a202c"),
            SchemaField("subtitleColor", "Subtitle colour", COLOR, "#718096"),
            SchemaField("primaryColor", "Primary colour (gradient or colour)", TEXT, "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"),
            SchemaField("labelColor", "Label colour", COLOR, "#2d3748"),
            SchemaField("inputBorderColor", "Input border colour", COLOR, "#e2e8f0"),
            SchemaField("inputBackground", "Input background", COLOR, "white"),
            SchemaField("inputColor", "Input text colour", COLOR, "#2d3748"),
            SchemaField("contentBackground", "Content background", COLOR, "#ffffff"),
            SchemaField("resultBackground", "Result background", COLOR, "#f8f9fa"),
            SchemaField("resultTextColor", "Result text colour", COLOR, "#2d3748"),
            SchemaField("highlightTextColor", "Highlight text colour", COLOR, "white"),
            SchemaField("defaultPropertyValue", "Default property value", NUMBER, 300000, min=0),
            SchemaField("defaultDownPayment", "Default down payment", NUMBER, 60000, min=0),
            SchemaField("defaultInterestRate", "Default interest rate (%)", NUMBER, 9.5, min=0, max=30),
            SchemaField("defaultLoanTerm", "Default term (years)", NUMBER, 30, min=1, max=35),
            SchemaField(
                "currency",
                "Currency",
                SELECT,
                "BRL",
                options=[{"label": code, "value": code} for code in CURRENCY_SYMBOLS],
            ),
            SchemaField(
                "labels",
                "Custom labels",
                OBJECT,
                dict(MORTGAGE_LABELS),
                item_fields=[SchemaField(key, label, TEXT) for key, label in MORTGAGE_LABELS.items()],
            ),
        ],
    ),
    default_style={"backgroundColor": "#f9fafb", "padding": "5rem 0"},
)

COMPONENTS = [
    (TemplateUnit("newsletter", NEWSLETTER_TEMPLATE), NEWSLETTER_METADATA),
    (TemplateUnit("mortgage-calculator", MORTGAGE_CALCULATOR_TEMPLATE), MORTGAGE_CALCULATOR_METADATA),
]
