from briefing_agent.agent_handler import main

main()
