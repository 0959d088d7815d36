from safe_hashes.cli import main

main()
