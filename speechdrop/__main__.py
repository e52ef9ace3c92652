from __future__ import annotations

from speechdrop.app import app
from speechdrop.config import DEBUG, PORT

# =========================
# Run
# =========================
if __name__ == "__main__":
    # Local dev only; deployments serve speechdrop.app:app with gunicorn.
    app.run(host="0.0.0.0", port=PORT, debug=DEBUG)
