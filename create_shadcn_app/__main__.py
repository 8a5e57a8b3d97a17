from create_shadcn_app.pipeline import main

main()
