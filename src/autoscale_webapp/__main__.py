from autoscale_webapp.api.app import main

main()
