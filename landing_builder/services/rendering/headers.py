"""Netlify ``_headers`` file shipped with every deploy."""

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin-allow-popups",
}

LONG_CACHE = "public, max-age=31536000"

# path pattern -> headers
PATH_HEADERS = [
    ("/*.html", {"Cache-Control": "no-cache"}),
    ("/*.css", {"Cache-Control": LONG_CACHE}),
    ("/*.js", {"Cache-Control": LONG_CACHE}),
    ("/assets/*", {"Cache-Control": LONG_CACHE}),
    ("/api/*", {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }),
]


def generate_headers() -> str:
    blocks = ["/*\n" + "\n".join(f"  {name}: {value}" for name, value in SECURITY_HEADERS.items())]
    for pattern, headers in PATH_HEADERS:
        blocks.append(pattern + "\n" + "\n".join(f"  {name}: {value}" for name, value in headers.items()))
    return "\n\n".join(blocks) + "\n"
