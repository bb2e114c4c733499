from template_admin.cli import main

main()
