# utils/forms.py
from typing import Dict


def changed_fields(shown: Dict, submitted: Dict) -> Dict:
    """Keep only the form values the user actually edited.

    Widgets cannot show a dangling member/department id or a missing start
    date, so they fall back to a placeholder; writing that placeholder back
    would silently replace the stored value.
    """
    return {k: v for k, v in submitted.items() if k not in shown or shown[k] != v}
