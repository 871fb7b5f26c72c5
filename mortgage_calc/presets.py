from mortgage_calc.models import FeeType, LoanProgram, PaymentFrequency

DISCLAIMER = (
    "These calculators provide estimates for educational purposes only. "
    "Actual rates, payments, mortgage insurance and funding fees depend on credit, "
    "property, program guidelines and lender overlays. "
    "Contact a licensed loan officer for a personalized quote."
)

# Annual mortgage-insurance-equivalent factors used when no manual monthly
# amount is supplied. VA carries no monthly insurance; Jumbo assumes 20%+ equity.
LOAN_PROGRAM_MI_RATES = {
    LoanProgram.CONVENTIONAL: 0.005,
    LoanProgram.FHA: 0.0085,
    LoanProgram.VA: 0.0,
    LoanProgram.USDA: 0.0035,
    LoanProgram.JUMBO: 0.0,
}

LOAN_PROGRAM_MI_LABELS = {
    LoanProgram.CONVENTIONAL: "PMI",
    LoanProgram.FHA: "MIP",
    LoanProgram.VA: "Mortgage Insurance",
    LoanProgram.USDA: "USDA Guarantee Fee",
    LoanProgram.JUMBO: "PMI",
}

VA_FUNDING_FEE_RATES = {
    FeeType.FIRST_TIME: 0.0215,
    FeeType.SUBSEQUENT: 0.033,
    FeeType.EXEMPT: 0.0,
}

PERIODS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.WEEKLY: 52,
}

# Affordability
DTI_RATIO = 0.43
AFFORDABILITY_TERM_MONTHS = 360

# Rent vs buy ownership cost assumptions, all annual fractions of home price
RENT_VS_BUY_ASSUMPTIONS = {
    "property_tax_rate": 0.012,
    "insurance_rate": 0.005,
    "maintenance_rate": 0.01,
    "closing_cost_rate": 0.03,
    "rent_inflation_rate": 0.03,
    "term_months": 360,
    "max_break_even_years": 30,
}

# DSCR
DSCR_TERM_YEARS = 30
DSCR_CLOSING_COST_RATE = 0.03
DSCR_MINIMUM = 1.0
DSCR_CASH_PURCHASE = 999.0
DSCR_TIERS = [
    (1.25, "Excellent", "Strong DSCR - likely to qualify with favorable terms"),
    (1.0, "Good", "Meets minimum DSCR requirements - should qualify"),
    (0.75, "Marginal", "Below minimum DSCR - may need larger down payment or higher rent"),
]
DSCR_POOR = ("Poor", "DSCR too low - property does not generate sufficient income")

# VA loans in the refinance calculator run the standard 30 year term
VA_REFINANCE_TERM_YEARS = 30

# Days between today and the default first payment date
FIRST_PAYMENT_OFFSET_DAYS = 30
