"""CSS styles for the topology page."""


def get_base_styles() -> str:
    """Get base styles for body and core layout.

    Returns:
        CSS string for base styling
    """
    return """
        body {
            margin: 0;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #0d1117;
            color: #c9d1d9;
            overflow: hidden;
        }

        #topology {
            display: flex;
            flex-direction: column;
            height: 100vh;
        }

        #topology.expanded {
            position: fixed;
            inset: 0;
            z-index: 50;
        }

        #canvas {
            position: relative;
            flex: 1;
            overflow: auto;
        }

        #graph { width: 100%; display: block; }
    """


def get_toolbar_styles() -> str:
    """Get styles for the toolbar and footer.

    Returns:
        CSS string for toolbar styling
    """
    return """
        #toolbar, #footer {
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 6px 16px;
            border-bottom: 1px solid #30363d;
            font-size: 12px;
        }

        #footer {
            border-top: 1px solid #30363d;
            border-bottom: none;
            color: #8b949e;
        }

        .toolbar-group { display: flex; align-items: center; gap: 8px; }
        .title { font-size: 14px; font-weight: 600; }

        button {
            background: transparent;
            border: 1px solid #30363d;
            border-radius: 6px;
            color: #c9d1d9;
            font-size: 12px;
            padding: 3px 8px;
            cursor: pointer;
        }

        button:hover { background: #21262d; }
        button.active { background: #1f6feb; border-color: #1f6feb; color: #fff; }

        .segmented { display: flex; }
        .segmented button:first-child { border-radius: 6px 0 0 6px; }
        .segmented button:last-child { border-radius: 0 6px 6px 0; border-left: none; }

        .search-box { position: relative; }
        .search-box input {
            width: 150px;
            height: 24px;
            padding: 0 22px 0 8px;
            background: #0d1117;
            border: 1px solid #30363d;
            border-radius: 6px;
            color: #c9d1d9;
            font-size: 12px;
        }
        #search-clear {
            position: absolute;
            right: 2px;
            top: 2px;
            border: none;
            padding: 0 4px;
            display: none;
        }
    """


def get_graph_styles() -> str:
    """Get styles for nodes, links, labels and the detail panel.

    Returns:
        CSS string for graph elements
    """
    return """
        .link { stroke: #cbd5e1; stroke-width: 1; fill: none; }
        .node circle, circle.node { stroke: #fff; stroke-width: 1.5; cursor: pointer; }
        .label { font-size: 9px; fill: #8b949e; pointer-events: none; }

        #detail-panel {
            position: sticky;
            top: 12px;
            float: right;
            margin-right: 12px;
            width: 256px;
            padding: 12px;
            background: rgba(22, 27, 34, 0.95);
            border: 1px solid #30363d;
            border-radius: 8px;
            font-size: 11px;
        }
        .detail-header { display: flex; justify-content: space-between; margin-bottom: 6px; }
        #detail-title { font-weight: 600; overflow: hidden; text-overflow: ellipsis; }
        #detail-path { color: #8b949e; font-size: 10px; margin-bottom: 8px; word-break: break-all; }
        .detail-section h4 { margin: 6px 0 4px 0; font-size: 10px; color: #8b949e; }
        .detail-list { max-height: 96px; overflow: auto; }
        .detail-list div { white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
    """


def get_all_styles() -> str:
    """Get all CSS styles combined.

    Returns:
        Complete CSS string
    """
    return "\n".join([get_base_styles(), get_toolbar_styles(), get_graph_styles()])
