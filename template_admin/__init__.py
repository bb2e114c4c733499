"""template-admin: scaffold web-app projects from JSON templates.

Templates can be written by hand or grown by extracting a source file, with
every project-local file it imports, out of an existing project::

    from template_admin.templates.merger import extract_into_template

    extract_into_template("app/src/pages/Home.tsx", "templates/shop.json", "app")
"""

__version__ = "0.1.0"
