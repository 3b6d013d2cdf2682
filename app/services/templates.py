from typing import Dict

_LABEL_CELL = "padding:10px 0;border-bottom:1px solid #f0f0f0;color:#666;font-size:14px;"
_VALUE_CELL = "padding:10px 0;border-bottom:1px solid #f0f0f0;color:#222;font-size:14px;"


def _layout(brand: str, heading: str, content: str, reply_to_name: str) -> str:
    return f"""
        <div style="font-family:Arial,sans-serif;max-width:600px;margin:auto;background:#f9f9f9;padding:30px;border-radius:8px;">
          <div style="background:#080c0a;padding:20px;border-radius:6px 6px 0 0;text-align:center;">
            <h2 style="color:#00e87a;margin:0;font-size:22px;">{brand}</h2>
            <p style="color:#7a9484;margin:6px 0 0;font-size:13px;">{heading}</p>
          </div>
          <div style="background:#fff;padding:24px;border-radius:0 0 6px 6px;border:1px solid #e0e0e0;border-top:none;">
{content}
            <div style="margin-top:20px;padding:12px;background:#f0fdf4;border-left:3px solid #00e87a;border-radius:4px;">
              <p style="margin:0;font-size:13px;color:#444;">💡 Hit <strong>Reply</strong> to respond directly to {reply_to_name}.</p>
            </div>
          </div>
          <p style="text-align:center;color:#aaa;font-size:11px;margin-top:16px;">Sent from {brand} website</p>
        </div>
"""


def _row(label: str, value: str, label_width: str = "", last: bool = False) -> str:
    label_style = _LABEL_CELL
    value_style = _VALUE_CELL
    if last:
        label_style = label_style.replace("border-bottom:1px solid #f0f0f0;", "")
        value_style = value_style.replace("border-bottom:1px solid #f0f0f0;", "")
    if label_width:
        label_style = label_style.replace("color:#666;", f"color:#666;width:{label_width};")
    return f"""              <tr>
                <td style="{label_style}"><strong>{label}</strong></td>
                <td style="{value_style}">{value}</td>
              </tr>
"""


def _table(rows: str) -> str:
    return f"""            <table style="width:100%;border-collapse:collapse;">
{rows}            </table>"""


def render_booking_html(fields: Dict[str, str], brand: str) -> str:
    rows = (
        _row("Full Name", f"{fields['first_name']} {fields['last_name']}", label_width="35%")
        + _row("Email", fields["email"])
        + _row("Preferred Date", fields["date"])
        + _row("Preferred Time", fields["time"], last=True)
    )
    return _layout(brand, "New Booking Request", _table(rows), fields["first_name"])


def render_contact_html(fields: Dict[str, str], brand: str) -> str:
    rows = (
        _row("Name", fields["name"], label_width="25%")
        + _row("Email", fields["email"])
    )
    message = f"""
            <div style="margin-top:20px;">
              <p style="color:#666;font-size:14px;margin-bottom:8px;"><strong>Message:</strong></p>
              <div style="background:#f8f8f8;padding:16px;border-radius:4px;border:1px solid #eee;color:#333;font-size:14px;line-height:1.7;white-space:pre-wrap;">{fields['message']}</div>
            </div>"""
    return _layout(brand, "New Contact Message", _table(rows) + message, fields["name"])


def render_booking_text(fields: Dict[str, str]) -> str:
    return (
        "New Booking Request\n\n"
        f"Full Name: {fields['first_name']} {fields['last_name']}\n"
        f"Email: {fields['email']}\n"
        f"Preferred Date: {fields['date']}\n"
        f"Preferred Time: {fields['time']}\n"
    )


def render_contact_text(fields: Dict[str, str]) -> str:
    return (
        "New Contact Message\n\n"
        f"Name: {fields['name']}\n"
        f"Email: {fields['email']}\n\n"
        f"Message:\n{fields['message']}\n"
    )
