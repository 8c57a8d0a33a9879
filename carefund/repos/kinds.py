# carefund/repos/kinds.py
DONATORS = "donators"
CASES = "cases"
DONATIONS = "donations"

# listings are newest-first by this field
TIMESTAMP_FIELDS = {
    DONATORS: "registration_date",
    CASES: "date_added",
    DONATIONS: "date",
}

KINDS = tuple(TIMESTAMP_FIELDS)


def timestamp_field(kind: str) -> str:
    try:
        return TIMESTAMP_FIELDS[kind]
    except KeyError:
        raise ValueError(f"Unknown entity kind: {kind}")
