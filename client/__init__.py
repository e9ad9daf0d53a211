"""
Python client for the Web Firm Solutions site.

Session-side counterparts of the browser app: storage, CAPTCHA, the contact
pipeline, the message service client, and the session that wires language
detection, translations and SEO together.
"""
