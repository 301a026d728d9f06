from agent.tools.search import SerperSearchClient, format_results
from agent.tools.web_search import ToolExecutor, build_web_search_tool

__all__ = ["SerperSearchClient", "ToolExecutor", "build_web_search_tool", "format_results"]
