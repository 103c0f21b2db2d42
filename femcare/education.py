CONTRACEPTIVE_METHODS = {
    "pill": {
        "name": "Birth Control Pills",
        "effectiveness": "91-99%",
        "type": "Hormonal",
        "description": "Daily oral contraceptives that prevent ovulation through hormone regulation.",
        "how_it_works": (
            "Synthetic estrogen and/or progestin stop the ovaries from releasing eggs "
            "and thicken cervical mucus to block sperm."
        ),
        "pros": [
            "Highly effective when used correctly",
            "Can regulate menstrual cycles",
            "May reduce cramps and acne",
            "Fertility returns quickly after stopping",
        ],
        "cons": [
            "Must be taken daily at the same time",
            "Possible nausea or mood changes",
            "No protection against STIs",
        ],
    },
    "condom": {
        "name": "Condoms",
        "effectiveness": "82-98%",
        "type": "Barrier",
        "description": "Thin sheaths that stop sperm from reaching the egg.",
        "how_it_works": "A physical barrier that keeps sperm out of the uterus and protects against STIs.",
        "pros": [
            "Protects against STIs and HIV",
            "No hormonal side effects",
            "Available without prescription",
        ],
        "cons": [
            "Must be used every time",
            "Can break or slip off",
            "Latex allergies in some people",
        ],
    },
    "iud": {
        "name": "Intrauterine Device (IUD)",
        "effectiveness": "99%+",
        "type": "Long-acting",
        "description": "Small T-shaped device inserted into the uterus by a healthcare provider.",
        "how_it_works": (
            "Hormonal IUDs release progestin; copper IUDs make the uterus "
            "hostile to sperm."
        ),
        "pros": [
            "Extremely effective",
            "Lasts 3-10 years depending on type",
            "No daily maintenance",
        ],
        "cons": [
            "Insertion and removal need a clinician",
            "No STI protection",
            "Initial cost can be high",
        ],
    },
    "implant": {
        "name": "Contraceptive Implant",
        "effectiveness": "99%+",
        "type": "Hormonal",
        "description": "Small flexible rod under the skin of the upper arm that releases hormones.",
        "how_it_works": "Continuously releases progestin to prevent ovulation.",
        "pros": [
            "Extremely effective",
            "Lasts up to 3 years",
            "Can be removed anytime",
        ],
        "cons": [
            "Needs a minor procedure",
            "May cause irregular bleeding",
            "No STI protection",
        ],
    },
    "injection": {
        "name": "Contraceptive Injection",
        "effectiveness": "94-99%",
        "type": "Hormonal",
        "description": "Hormone injection given every 3 months by a healthcare provider.",
        "how_it_works": "Releases progestin to prevent ovulation and thicken cervical mucus.",
        "pros": [
            "Only need to remember every 3 months",
            "May reduce menstrual bleeding",
            "Private method",
        ],
        "cons": [
            "Regular clinic visits",
            "Fertility may take 6-12 months to return",
            "No STI protection",
        ],
    },
}

FAQS = [
    (
        "How effective are different birth control methods?",
        "IUDs and implants are over 99% effective, pills 91-99% with perfect use, "
        "and condoms 82-98%. Consistent, correct use matters most.",
    ),
    (
        "What should I do if I miss a birth control pill?",
        "Take it as soon as you remember. If you miss two or more, take the most "
        "recent one, use backup contraception for 7 days and consider emergency "
        "contraception after unprotected sex.",
    ),
    (
        "What is emergency contraception?",
        "Plan B, ella or a copper IUD can prevent pregnancy after unprotected sex. "
        "It works best as soon as possible, ideally within 72 hours, and up to 5 days.",
    ),
    (
        "Which methods protect against STIs?",
        "Only barrier methods. Condoms are the most effective; hormonal methods and "
        "IUDs give no STI protection.",
    ),
    (
        "How quickly does fertility return after stopping?",
        "Pills, patches and rings: usually 1-3 months. IUDs and implants: within a "
        "month of removal. Injections: can take 6-12 months.",
    ),
]

MYTHS_AND_FACTS = [
    ("Birth control pills cause weight gain",
     "Most studies show no significant weight gain; temporary water retention usually settles."),
    ("IUDs are only for people who have had children",
     "Modern IUDs are safe and effective at any age, with or without children."),
    ("Birth control causes infertility",
     "Fertility returns to normal after stopping nearly every method."),
    ("You can't get pregnant while breastfeeding",
     "Ovulation can return before the first period after childbirth."),
]


ARTICLES = {
    "planning-pregnancy": {
        "title": "Planning for Pregnancy: What You Need to Know",
        "summary": (
            "Essential steps to take before trying to conceive, including "
            "preconception health, timing, and lifestyle changes."
        ),
        "content": (
            "*Before trying to conceive:*\n"
            "• Start folic acid supplements (400-800 mcg daily)\n"
            "• Book a preconception checkup and review your medications\n"
            "• Update vaccinations\n"
            "• Keep a healthy weight, quit smoking and limit alcohol\n\n"
            "*Understanding your fertility:*\n"
            "• Track your cycle to find your fertile window\n"
            "• Ovulation usually happens 14 days before your next period\n"
            "• The fertile window is about 6 days: the 5 days before ovulation plus ovulation day\n"
            "• Ovulation kits or basal body temperature can help confirm it\n\n"
            "*Timing:*\n"
            "• Every other day during the fertile window is usually enough\n"
            "• Regular intercourse matters more than perfect timing\n\n"
            "*When to seek help:*\n"
            "• Under 35 and not pregnant after 12 months of trying\n"
            "• Over 35 and not pregnant after 6 months of trying\n"
            "• Irregular periods or known fertility issues"
        ),
    },
    "reproductive-health": {
        "title": "Understanding Your Reproductive Health",
        "summary": (
            "Comprehensive guide to female reproductive anatomy, menstrual cycle, "
            "and maintaining reproductive health."
        ),
        "content": (
            "*Menstrual cycle basics:*\n"
            "• Average cycle length is 28 days, but 21-35 days is normal\n"
            "• Periods usually last 3-7 days\n"
            "• Four phases: menstrual, follicular, ovulation and luteal\n\n"
            "*Signs of healthy function:*\n"
            "• Regular cycles and manageable symptoms\n"
            "• Discharge that changes through the cycle\n"
            "• No persistent pelvic pain or unusual bleeding\n\n"
            "*Staying healthy:*\n"
            "• Regular gynecological checkups and screenings\n"
            "• Safe sex to prevent STIs\n"
            "• Good nutrition, exercise and stress management\n"
            "• Up-to-date vaccinations (HPV and others)\n\n"
            "*See a provider for:*\n"
            "• Irregular or absent periods\n"
            "• Severe pain or heavy bleeding\n"
            "• Unusual discharge or odor, pelvic pain, or pain during sex"
        ),
    },
    "contraception-choosing": {
        "title": "Choosing the Right Contraception for You",
        "summary": (
            "Factors to consider when selecting a birth control method, including "
            "lifestyle, health, and personal preferences."
        ),
        "content": (
            "*Factors to consider:*\n"
            "• Your age and health\n"
            "• Whether you want children in the future\n"
            "• How often you have sex\n"
            "• Comfort with hormones and need for STI protection\n"
            "• Cost and insurance coverage\n\n"
            "*Questions to ask yourself:*\n"
            "• Do I want something I use only during sex, or continuous protection?\n"
            "• How important is it that I can stop the method myself?\n"
            "• How do I feel about changes to my periods?\n\n"
            "*With your healthcare provider:*\n"
            "• Be open about your health history and medications\n"
            "• Ask about side effects and correct use\n"
            "• Know when to switch methods\n\n"
            "No method is perfect for everyone, and it's fine to change as your needs change."
        ),
    },
}


def format_article(article_id: str) -> str | None:
    article = ARTICLES.get(article_id)
    if article is None:
        return None
    return f"*{article['title']}*\n_{article['summary']}_\n\n{article['content']}"


def format_method(key: str) -> str | None:
    method = CONTRACEPTIVE_METHODS.get(key)
    if method is None:
        return None
    pros = "\n".join(f"✅ {p}" for p in method["pros"])
    cons = "\n".join(f"⚠️ {c}" for c in method["cons"])
    return (
        f"*{method['name']}* ({method['type']}, {method['effectiveness']} effective)\n\n"
        f"{method['description']}\n\n"
        f"*How it works:* {method['how_it_works']}\n\n"
        f"{pros}\n{cons}"
    )


def search(query: str) -> list[str]:
    """Return formatted methods, FAQs, myths and article teasers mentioning query."""
    query = query.lower().strip()
    if not query:
        return []
    hits = [
        format_method(key) for key, method in CONTRACEPTIVE_METHODS.items()
        if query in method["name"].lower() or query in method["description"].lower()
    ]
    hits += [f"*{q}*\n{a}" for q, a in FAQS if query in q.lower() or query in a.lower()]
    hits += [
        f"*Myth:* {myth}\n*Fact:* {fact}" for myth, fact in MYTHS_AND_FACTS
        if query in myth.lower() or query in fact.lower()
    ]
    hits += [
        f"📖 *{article['title']}*\n{article['summary']}\nRead it: `/learn {article_id}`"
        for article_id, article in ARTICLES.items()
        if query in article["title"].lower() or query in article["summary"].lower()
    ]
    return hits
