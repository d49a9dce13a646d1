"""HTML templates for the start page and result pages.

Colors:
- Background: #FAF9F7 (warm cream)
- Primary: #D97756 (terracotta), hover #C4684A
- Revoke: #B91C1C, introspect: #0E7490
- Text: #1A1915, secondary #6B6860
"""

import html
import json

_BASE_STYLE = """
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
               background: #FAF9F7; color: #1A1915; margin: 0; padding: 40px 20px; }}
        .container {{ background: white; padding: 32px; border-radius: 16px; box-shadow: 0 4px 24px rgba(0,0,0,0.08);
                     max-width: 800px; margin: 0 auto; border: 1px solid #E5E4E0; }}
        h1, h2 {{ margin: 0 0 16px; font-weight: 600; }}
        p {{ color: #6B6860; line-height: 1.6; }}
"""

INDEX_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>OAuth 2.0 Client Demo</title>
    <style>""" + _BASE_STYLE + """
        .container {{ text-align: center; }}
        .url-container {{ text-align: left; word-break: break-all; background: #F5F5F0;
                         padding: 15px; border-radius: 8px; margin: 20px 0; font-size: 14px; }}
        .url-label {{ font-weight: 600; display: block; margin-bottom: 10px; }}
        .login-button {{ display: inline-block; background: #D97756; color: white; padding: 12px 20px;
                        text-decoration: none; border-radius: 8px; font-weight: 600; margin-top: 12px; }}
        .login-button:hover {{ background: #C4684A; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>OAuth 2.0 Authorization Code Demo</h1>
        <p>
            This application is a client of {provider} acting as an OAuth 2.0 identity provider.
            It runs the authorization code flow{pkce_note}, then lets you refresh, inspect and revoke the tokens.
        </p>
        <div class="url-container">
            <span class="url-label">OAuth 2.0 Authorization URL:</span>
            {authorization_url}
        </div>
        <a href="{authorization_url}" class="login-button">Log in with {provider}</a>
    </div>
</body>
</html>
"""

ACTION_BUTTONS = """
        <div class="button-container">
            <a class="button" href="/refresh">Refresh Token</a>
            <a class="button" href="/userinfo">User Info</a>
            <a class="button" href="/tokeninfo">Token Info</a>
            <a class="button revoke" href="/revoke/access">Revoke Access Token</a>
            <a class="button revoke" href="/revoke/refresh">Revoke Refresh Token</a>
            <a class="button introspect" href="/introspect/access">Introspect Access Token</a>
            <a class="button introspect" href="/introspect/refresh">Introspect Refresh Token</a>
        </div>
"""

RESULT_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>{title}</title>
    <style>""" + _BASE_STYLE + """
        pre {{ background: #F5F5F0; padding: 12px; border-radius: 8px; overflow: auto; max-height: 400px; }}
        .button-container {{ margin: 20px 0; display: flex; gap: 10px; flex-wrap: wrap; }}
        .button {{ background: #D97756; color: white; padding: 10px 15px; border-radius: 8px;
                  text-decoration: none; font-size: 14px; font-weight: 500; }}
        .button:hover {{ background: #C4684A; }}
        .revoke {{ background: #B91C1C; }}
        .revoke:hover {{ background: #991B1B; }}
        .introspect {{ background: #0E7490; }}
        .introspect:hover {{ background: #155E75; }}
    </style>
</head>
<body>
    <div class="container">
        <h2>{heading}</h2>
        {buttons}
        <pre>{data}</pre>
    </div>
</body>
</html>
"""


def render_index(authorization_url: str, provider: str, pkce: bool) -> str:
    return INDEX_PAGE.format(
        authorization_url=html.escape(authorization_url),
        provider=html.escape(provider),
        pkce_note=" with PKCE" if pkce else "",
    )


def render_result(title: str, heading: str, data: dict, show_buttons: bool = True) -> str:
    return RESULT_PAGE.format(
        title=html.escape(title),
        heading=html.escape(heading),
        buttons=ACTION_BUTTONS if show_buttons else "",
        data=html.escape(json.dumps(data, indent=2)),
    )
