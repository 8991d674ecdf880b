"""HTML email bodies for account and post notifications."""
from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class Button:
    text: str
    link: str
    color: str = "#22BC66"


def render(product_name: str, product_link: str, name: str, intro: str, outro: str, button: Button | None = None) -> str:
    action = ""
    if button is not None:
        action = (
            '<p>To get started with your account, please click here:</p>'
            f'<p><a href="{escape(button.link)}" style="background:{escape(button.color)};color:#fff;'
            f'padding:10px 18px;border-radius:3px;text-decoration:none">{escape(button.text)}</a></p>'
        )
    return (
        "<html><body style=\"font-family:Helvetica,Arial,sans-serif\">"
        f"<h2><a href=\"{escape(product_link)}\">{escape(product_name)}</a></h2>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>{escape(intro)}</p>"
        f"{action}"
        f"<p>{escape(outro)}</p>"
        f"<p>Yours truly,<br>{escape(product_name)}</p>"
        "</body></html>"
    )


class EmailComposer:
    """Builds the messages for each event, branded with the configured product."""

    def __init__(self, product_name: str, product_link: str):
        self.product_name = product_name
        self.product_link = product_link

    def _message(self, to: str, subject: str, name: str, intro: str, outro: str, button: Button | None = None) -> EmailMessage:
        html = render(self.product_name, self.product_link, name, intro, outro, button)
        return EmailMessage(to=to, subject=subject, html=html)

    def registration(self, to: str, username: str) -> EmailMessage:
        return self._message(
            to,
            "Registration Successful",
            username,
            f"Welcome to {self.product_name}! We are excited to have you.",
            "If you did not register for this account, please disregard this email.",
            Button(text="Confirm your account", link=self.product_link.rstrip("/") + "/confirm"),
        )

    def login(self, to: str, username: str) -> EmailMessage:
        return self._message(
            to,
            "Login Notification",
            username,
            "You have successfully logged into your account.",
            "If you did not log in, please contact our support team.",
        )

    def post_created(self, to: str, username: str, title: str) -> EmailMessage:
        return self._message(
            to,
            "New Post Created",
            username,
            f'You have successfully created a new post titled "{title}".',
            "If you did not create this post, please contact our support team.",
        )

    def post_updated(self, to: str, username: str, title: str) -> EmailMessage:
        return self._message(
            to,
            "Post Updated",
            username,
            f'Your post titled "{title}" has been updated.',
            "If you did not update this post, please contact our support team.",
        )

    def post_deleted(self, to: str, username: str, title: str) -> EmailMessage:
        return self._message(
            to,
            "Post Deleted",
            username,
            f'Your post titled "{title}" has been deleted.',
            "If you did not delete this post, please contact our support team.",
        )
