"""Single-page HTML interface served at ``GET /``."""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Spline Webhook Manager</title>
  <style>
    body { font-family: system-ui, -apple-system, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; line-height: 1.6; }
    h1 { color: #2563eb; }
    .card { border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; margin-bottom: 20px; }
    label { display: block; margin-bottom: 5px; font-weight: 500; }
    input, textarea, select { width: 100%; padding: 8px; border: 1px solid #d1d5db; border-radius: 4px; margin-bottom: 10px; box-sizing: border-box; }
    small { color: #6b7280; display: block; margin-bottom: 10px; }
    button { background-color: #2563eb; color: white; border: none; padding: 8px 16px; border-radius: 4px; cursor: pointer; }
    button:hover { background-color: #1d4ed8; }
    .webhook-item { background-color: #f9fafb; padding: 15px; margin-bottom: 10px; border-radius: 4px; }
    .webhook-url { background-color: #f3f4f6; padding: 8px; border-radius: 4px; word-break: break-all; font-family: monospace; }
    .debug-log { height: 200px; overflow-y: auto; background-color: #1e293b; color: #e2e8f0; padding: 10px; font-family: monospace; border-radius: 4px; }
    .error { color: #f87171; }
  </style>
</head>
<body>
  <h1>Spline Webhook Manager</h1>

  <div class="card">
    <h2>Create a Webhook</h2>
    <form id="create-form">
      <label for="webhook-name">Webhook Name</label>
      <input type="text" id="webhook-name" required>

      <label for="spline-webhook-url">Spline Webhook URL (Optional)</label>
      <input type="text" id="spline-webhook-url" placeholder="https://hooks.spline.design/yourID">
      <small>If provided, received data is forwarded to this Spline webhook</small>

      <div id="variables-container">
        <h3>Variables</h3>
      </div>
      <button type="button" id="add-variable">Add Variable</button>
      <button type="submit">Create Webhook</button>
    </form>
  </div>

  <div class="card">
    <h2>Your Webhooks</h2>
    <button id="refresh-btn">Refresh</button>
    <div id="webhook-list"></div>
  </div>

  <div class="card">
    <h2>Send Test Data</h2>
    <label for="webhook-select">Select Webhook</label>
    <select id="webhook-select">
      <option value="">-- Select a webhook --</option>
    </select>
    <label for="test-data">JSON Data</label>
    <textarea id="test-data" rows="5">{}</textarea>
    <button id="send-data-btn">Send Data</button>
  </div>

  <div class="card">
    <h2>Results</h2>
    <div id="result"></div>
  </div>

  <div class="card">
    <h2>Debug Log</h2>
    <div class="debug-log" id="debug-log"></div>
  </div>

  <script>
    const log = (message, isError) => {
      const line = document.createElement('div');
      line.textContent = `[${new Date().toLocaleTimeString()}] ${message}`;
      if (isError) line.className = 'error';
      const box = document.getElementById('debug-log');
      box.appendChild(line);
      box.scrollTop = box.scrollHeight;
    };

    const addVariableRow = () => {
      const row = document.createElement('div');
      row.innerHTML = `
        <input type="text" placeholder="Variable name" class="variable-name">
        <select class="variable-type">
          <option value="string">String</option>
          <option value="number">Number</option>
          <option value="boolean">Boolean</option>
        </select>`;
      document.getElementById('variables-container').appendChild(row);
    };

    const showResult = (html) => { document.getElementById('result').innerHTML = html; };

    async function fetchWebhooks() {
      try {
        const response = await fetch('/webhooks');
        const data = await response.json();
        const list = document.getElementById('webhook-list');
        const select = document.getElementById('webhook-select');
        list.innerHTML = '';
        select.innerHTML = '<option value="">-- Select a webhook --</option>';
        data.webhooks.forEach((webhook) => {
          const item = document.createElement('div');
          item.className = 'webhook-item';
          item.innerHTML = `<strong></strong><div class="webhook-url"></div>`;
          item.querySelector('strong').textContent = webhook.name;
          item.querySelector('.webhook-url').textContent = webhook.fullUrl;
          list.appendChild(item);
          const option = document.createElement('option');
          option.value = webhook.url;
          option.textContent = webhook.name;
          select.appendChild(option);
        });
        log(`Loaded ${data.webhooks.length} webhook(s)`);
      } catch (error) {
        log(`Error fetching webhooks: ${error.message}`, true);
      }
    }

    document.getElementById('add-variable').addEventListener('click', addVariableRow);
    document.getElementById('refresh-btn').addEventListener('click', fetchWebhooks);

    document.getElementById('create-form').addEventListener('submit', async (event) => {
      event.preventDefault();
      const variables = [];
      document.querySelectorAll('#variables-container > div').forEach((row) => {
        const name = row.querySelector('.variable-name').value.trim();
        if (name) variables.push({ name, type: row.querySelector('.variable-type').value });
      });
      const payload = { name: document.getElementById('webhook-name').value, variables };
      const splineUrl = document.getElementById('spline-webhook-url').value.trim();
      if (splineUrl) payload.splineWebhookUrl = splineUrl;
      try {
        const response = await fetch('/create-webhook', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(payload),
        });
        const data = await response.json();
        if (!data.success) throw new Error(data.error);
        showResult(`<p>Webhook created: <code>${data.webhookUrl}</code></p>`);
        log(`Created webhook ${data.webhook.name}`);
        fetchWebhooks();
      } catch (error) {
        log(`Error creating webhook: ${error.message}`, true);
      }
    });

    document.getElementById('send-data-btn').addEventListener('click', async () => {
      const url = document.getElementById('webhook-select').value;
      if (!url) return;
      try {
        const response = await fetch(url, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: document.getElementById('test-data').value,
        });
        const result = await response.json();
        showResult(`<pre>${JSON.stringify(result, null, 2)}</pre>`);
        log(result.success ? `Sent data to ${result.webhook}` : `Error: ${result.error}`, !result.success);
      } catch (error) {
        log(`Error sending data: ${error.message}`, true);
      }
    });

    addVariableRow();
    fetchWebhooks();
  </script>
</body>
</html>
"""
