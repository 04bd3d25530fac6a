"""OTP email rendering."""

from html import escape


def render_download_otp_email(
    name: str,
    resource_name: str,
    otp: str,
    ttl_minutes: int,
    firm_name: str,
) -> tuple[str, str]:
    """
    Render the email carrying a download verification code.

    Args:
        name: Recipient name
        resource_name: Tool or article being unlocked
        otp: Six-digit code
        ttl_minutes: Minutes until the code expires
        firm_name: Sender firm shown in the signature

    Returns:
        Tuple of (subject, html body)
    """
    subject = f"Your verification code for {resource_name}"
    html = f"""
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <p>Dear {escape(name)},</p>
    <p>Use the code below to verify your email and download
    <strong>{escape(resource_name)}</strong>.</p>
    <p style="font-size: 28px; font-weight: bold; letter-spacing: 6px;
              background: #f4f6f8; padding: 16px; text-align: center;">{escape(otp)}</p>
    <p>This code expires in {ttl_minutes} minutes. If you did not request this download,
    you can ignore this email.</p>
    <p>Best regards,<br>{escape(firm_name)}<br>Chartered Accountants</p>
  </div>
</body>
</html>
"""
    return subject, html
