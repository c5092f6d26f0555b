from aggregate_feeds.cli import main

main()
