"""Phone dialer link for contacting a listing's owner"""


def dial_url(phone_number) -> str:
    number = str(phone_number or "").strip()
    if not number:
        raise ValueError("Listing has no phone number")
    return f"tel:{number}"
