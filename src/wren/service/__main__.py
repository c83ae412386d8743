"""``python -m wren.service``: serve the sample app on 0.0.0.0:5000."""

from wren.service import app

if __name__ == "__main__":
    app.run()
