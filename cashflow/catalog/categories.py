"""
Static Category Table

Australian tax categories with the keywords used to recognise them on a
bank statement. Loaded once at import and never mutated.

DESIGN DECISION: Declaration order is significant. The classifier breaks
ties between equally long keywords by taking the first declared, so
reordering rows here changes classification results.
"""

from cashflow.models.transaction import (
    CategoryDefinition,
    Direction,
    TaxTreatmentCode,
)

GST = TaxTreatmentCode.STANDARD_RATE
GST_FREE = TaxTreatmentCode.ZERO_RATED
INPUT_TAXED = TaxTreatmentCode.INPUT_TAXED
BAS_EXCLUDED = TaxTreatmentCode.OUT_OF_SCOPE

OTHER_INCOME = "other_income"
GOVT_INCOME = "govt_income"
PERSONAL_OTHER = "personal_other"


def _income(key, label, icon, tax_code, keywords):
    return CategoryDefinition(
        key=key,
        label=label,
        icon=icon,
        direction=Direction.INCOME,
        tax_code=tax_code,
        deductible=False,
        keywords=tuple(keywords),
    )


def _expense(key, label, icon, tax_code, deductible, keywords):
    return CategoryDefinition(
        key=key,
        label=label,
        icon=icon,
        direction=Direction.EXPENSE,
        tax_code=tax_code,
        deductible=deductible,
        keywords=tuple(keywords),
    )


# =============================================================================
# INCOME
# =============================================================================

INCOME_CATEGORIES = (
    _income("salary_income", "Salary / Wages", "💰", BAS_EXCLUDED, [
        "salary", "payroll", "wage", "direct deposit", "pay run",
        "fortnightly pay", "weekly pay", "employer", "payg",
    ]),
    _income("sales_income", "Sales / Revenue", "🛒", GST, [
        "invoice", "payment received", "client payment", "sale", "revenue",
        "pos", "square", "shopify", "stripe transfer", "paypal transfer",
    ]),
    _income("freelance_income", "Freelance / Contract", "💻", GST, [
        "freelance", "consulting", "contract", "abn", "contractor", "fiverr",
        "upwork", "toptal",
    ]),
    _income("interest_income", "Interest Income", "🏦", INPUT_TAXED, [
        "interest", "savings interest", "term deposit", "ing interest",
        "ubank interest", "bonus interest",
    ]),
    _income("investment_income", "Investment Income", "📈", GST_FREE, [
        "dividend", "distribution", "vanguard", "betashares", "capital gain",
        "etf", "shares", "commsec", "selfwealth", "stake",
    ]),
    _income(GOVT_INCOME, "Government Payments", "🏛️", BAS_EXCLUDED, [
        "centrelink", "jobseeker", "youth allowance", "austudy",
        "family tax benefit", "child care subsidy", "services australia",
        "ato refund", "tax refund", "gst refund",
    ]),
    _income("rental_income", "Rental Income", "🏘️", GST_FREE, [
        "rent received", "tenant", "rental income", "property income",
        "airbnb income",
    ]),
    # Catch-all. Also matched explicitly for refunds and transfers.
    _income(OTHER_INCOME, "Other Income", "🎁", GST_FREE, [
        "refund", "rebate", "cashback", "reimbursement", "bonus", "gift",
        "transfer in", "deposit", "credit",
    ]),
)


# =============================================================================
# EXPENSES
# =============================================================================

EXPENSE_CATEGORIES = (
    # Business deductible
    _expense("advertising", "Advertising & Marketing", "📣", GST, True, [
        "google ads", "facebook ads", "meta ads", "instagram", "tiktok ads",
        "linkedin ads", "marketing", "advertising", "ad spend", "seo", "sem",
        "mailchimp", "hubspot", "sendinblue", "convertkit", "flyer",
        "signage", "business cards", "vistaprint",
    ]),
    _expense("vehicle", "Motor Vehicle", "🚗", GST, True, [
        "fuel", "petrol", "diesel", "bp ", "shell", "caltex", "ampol",
        "7-eleven fuel", "united fuel", "rego", "registration", "car service",
        "car wash", "mechanic", "repco", "supercheap auto", "parking",
        "wilson parking", "secure parking", "toll", "linkt", "etoll",
        "citylink", "eastlink", "go via", "roam", "nrma", "racq", "racv",
        "raa",
    ]),
    _expense("office", "Office Supplies", "🖥️", GST, True, [
        "officeworks", "stationery", "printer", "ink", "toner", "paper",
        "desk", "chair", "monitor", "keyboard", "mouse", "headset", "webcam",
        "usb", "hard drive", "ssd",
    ]),
    _expense("equipment", "Equipment & Tools", "🔧", GST, True, [
        "bunnings", "tools", "equipment", "hardware", "laptop", "computer",
        "ipad", "tablet", "camera", "jb hi-fi", "jb hifi", "harvey norman",
        "apple store", "dell", "lenovo",
    ]),
    _expense("rent_business", "Rent (Business)", "🏢", GST, True, [
        "office rent", "coworking", "wework", "workspace", "studio rent",
        "commercial rent", "warehouse",
    ]),
    _expense("phone_internet", "Phone & Internet", "📱", GST, True, [
        "telstra", "optus", "vodafone", "tpg", "aussie broadband", "iinet",
        "dodo", "belong", "amaysim", "boost mobile", "aldi mobile", "felix",
        "spintel", "nbn", "internet", "phone plan", "mobile plan", "sim",
    ]),
    _expense("power_utilities", "Utilities (Business)", "⚡", GST, True, [
        "origin energy", "agl", "energy australia", "energyaustralia",
        "alinta", "red energy", "lumo", "powershop", "electricity",
        "electric", "gas bill", "water bill", "council rates",
    ]),
    _expense("insurance_biz", "Insurance (Business)", "🛡️", GST, True, [
        "public liability", "professional indemnity", "business insurance",
        "income protection", "workers comp", "bizcover",
    ]),
    _expense("subscriptions", "Software & Subscriptions", "💿", GST, True, [
        "adobe", "xero", "myob", "quickbooks", "reckon", "canva", "figma",
        "notion", "slack", "zoom", "microsoft 365", "google workspace",
        "dropbox", "github", "aws", "azure", "heroku", "vercel", "netlify",
        "domain", "hosting", "godaddy", "cloudflare", "namecheap",
        "siteground", "squarespace", "wix", "wordpress", "saas", "software",
        "app store", "play store",
    ]),
    _expense("professional", "Professional Services", "👔", GST, True, [
        "accountant", "h&r block", "tax agent", "tax return", "lawyer",
        "solicitor", "legal", "bookkeeper", "bas agent", "financial adviser",
        "planner", "architect", "engineer",
    ]),
    _expense("travel", "Travel (Business)", "✈️", GST, True, [
        "flight", "qantas", "jetstar", "virgin australia", "rex airlines",
        "tigerair", "hotel", "airbnb", "booking.com", "expedia", "wotif",
        "accommodation", "motel", "serviced apartment",
    ]),
    _expense("meals_ent", "Meals & Entertainment", "🍽️", GST, True, [
        "restaurant", "cafe", "coffee", "mcdonald", "kfc", "subway",
        "dominos", "pizza hut", "hungry jack", "guzman", "nando", "sushi",
        "thai", "indian", "chinese", "vietnamese", "uber eats", "deliveroo",
        "menulog", "doordash", "grubhub",
    ]),
    _expense("bank_fees", "Bank & Merchant Fees", "🏦", INPUT_TAXED, True, [
        "bank fee", "account fee", "monthly fee", "overdrawn",
        "merchant fee", "stripe fee", "paypal fee", "square fee",
        "afterpay fee", "zip fee", "eftpos", "atm fee", "international fee",
        "currency conversion",
    ]),
    _expense("education", "Training & Education", "📚", GST, True, [
        "course", "udemy", "coursera", "skillshare", "linkedin learning",
        "pluralsight", "training", "workshop", "seminar", "conference",
        "summit", "bootcamp", "certification",
    ]),
    _expense("home_office", "Home Office", "🏡", GST, True, [
        "home office", "work from home", "wfh",
    ]),
    _expense("super_contribution", "Superannuation", "🏦", BAS_EXCLUDED, True, [
        "super contribution", "superannuation", "super fund",
        "australian super", "hostplus", "sunsuper", "rest super", "cbus",
        "unisuper", "aware super", "smsf",
    ]),
    # Personal, not deductible
    _expense("housing", "Housing / Rent", "🏠", BAS_EXCLUDED, False, [
        "rent", "mortgage", "home loan", "strata", "body corp",
        "council rates", "land tax",
    ]),
    _expense("groceries", "Groceries", "🛒", BAS_EXCLUDED, False, [
        "woolworths", "woolies", "coles", "aldi", "iga", "costco",
        "harris farm", "grocery", "supermarket", "food", "butcher", "baker",
        "fruit", "veg", "market",
    ]),
    _expense("health", "Health & Medical", "🏥", GST_FREE, False, [
        "doctor", "gp", "pharmacy", "chemist warehouse", "priceline pharmacy",
        "terry white", "dental", "dentist", "optometrist", "specsavers",
        "opsm", "physio", "physiotherapy", "chiro", "chiropractor",
        "pathology", "radiology", "hospital", "medical", "medicare",
        "medibank", "bupa", "nib", "hbf", "hcf", "ahm", "health insurance",
    ]),
    _expense("transport_personal", "Transport (Personal)", "🚌", BAS_EXCLUDED, False, [
        "uber", "lyft", "didi", "ola", "taxi", "13cabs", "opal", "myki",
        "go card", "metrocard", "smartrider", "translink", "bus", "train",
        "tram", "ferry",
    ]),
    _expense("shopping", "Shopping (Personal)", "🛍️", BAS_EXCLUDED, False, [
        "amazon", "ebay", "kmart", "target", "big w", "ikea", "freedom",
        "catch.com", "temple & webster", "clothing", "cotton on", "uniqlo",
        "h&m", "zara", "myer", "david jones", "country road", "rebel sport",
        "bcf", "anaconda",
    ]),
    _expense("entertainment", "Entertainment", "🎬", BAS_EXCLUDED, False, [
        "netflix", "spotify", "disney", "stan", "binge", "kayo", "foxtel",
        "paramount", "apple tv", "youtube premium", "cinema", "hoyts",
        "event cinema", "village cinema", "movie", "game", "playstation",
        "xbox", "steam", "nintendo", "ticket", "ticketek", "ticketmaster",
        "eventbrite", "concert", "festival", "gym", "anytime fitness",
        "fitness first", "f45",
    ]),
    _expense("kids_family", "Kids & Family", "👶", BAS_EXCLUDED, False, [
        "childcare", "child care", "daycare", "kindy", "kindergarten",
        "school fees", "school", "uniform", "baby bunting", "toys r us",
        "toy world",
    ]),
    _expense("insurance_personal", "Insurance (Personal)", "🛡️", BAS_EXCLUDED, False, [
        "car insurance", "home insurance", "contents insurance",
        "life insurance", "nrma insurance", "allianz", "suncorp", "qbe",
        "aami", "gio", "youi", "budget direct", "real insurance",
    ]),
    _expense("donations", "Donations & Gifts", "❤️", GST_FREE, True, [
        "donation", "charity", "dgr", "red cross", "salvation army",
        "smith family", "unicef", "world vision", "oxfam", "beyond blue",
        "gofundme",
    ]),
    # Catch-all
    _expense(PERSONAL_OTHER, "Other / Uncategorized", "📦", BAS_EXCLUDED, False, []),
)


ALL_CATEGORIES = INCOME_CATEGORIES + EXPENSE_CATEGORIES
