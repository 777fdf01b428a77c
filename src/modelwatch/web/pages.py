"""Static pages served by the front door."""

INDEX_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>LLM Models Monitor</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
            max-width: 800px;
            margin: 0 auto;
            padding: 40px 20px;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
        }
        .container {
            background: white;
            border-radius: 12px;
            padding: 32px;
            box-shadow: 0 20px 60px rgba(0,0,0,0.3);
        }
        h1 { color: #333; margin-bottom: 8px; }
        .subtitle { color: #666; margin-bottom: 32px; }
        .endpoints { background: #f8f9fa; border-radius: 8px; padding: 24px; }
        .endpoint {
            display: flex;
            align-items: center;
            margin-bottom: 16px;
            padding: 12px;
            background: white;
            border-radius: 6px;
        }
        .method {
            display: inline-block;
            padding: 4px 8px;
            border-radius: 4px;
            font-weight: 600;
            font-size: 12px;
            margin-right: 12px;
            min-width: 50px;
            text-align: center;
        }
        .method.get { background: #e3f2fd; color: #1976d2; }
        .method.post { background: #e8f5e9; color: #388e3c; }
        .path {
            font-family: 'SF Mono', Monaco, monospace;
            color: #333;
            font-weight: 500;
            margin-right: 16px;
        }
        .description { color: #666; font-size: 14px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>🤖 LLM Models Monitor</h1>
        <p class="subtitle">Monitor the model list changes of major LLM providers</p>
        <div class="endpoints">
            <h3>Endpoints</h3>
            <div class="endpoint">
                <span class="method get">GET</span>
                <span class="path">/monitor</span>
                <span class="description">Manually trigger model monitoring</span>
            </div>
            <div class="endpoint">
                <span class="method get">GET</span>
                <span class="path">/status</span>
                <span class="description">View current monitoring status</span>
            </div>
            <div class="endpoint">
                <span class="method post">POST</span>
                <span class="path">/clear</span>
                <span class="description">Clear all cached data</span>
            </div>
            <div class="endpoint">
                <span class="method get">GET</span>
                <span class="path">/health</span>
                <span class="description">Health check</span>
            </div>
        </div>
    </div>
</body>
</html>
"""
