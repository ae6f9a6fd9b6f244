import os

from dotenv import load_dotenv
from flask import (
    Flask,
    Response,
    flash,
    jsonify,
    render_template,
    request,
)
from werkzeug.exceptions import RequestEntityTooLarge

from generator import GenerationError, generate_ad
from models import PropertyData, missing_fields
from preview import check_preview, make_preview

load_dotenv()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

OUTPUT_CARDS = [
    ("short_hook", "Short Hook"),
    ("ad_copy", "Ad Copy"),
    ("narration", "Narration Script"),
    ("full_script", "Full Script"),
    ("key_points", "Key Selling Points"),
    ("cta", "Call to Action"),
]

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024  # 10MB
app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-secret")


def _api_key() -> str:
    return os.getenv("LOVABLE_API_KEY", "")


def _json(payload: dict, status: int = 200):
    resp = jsonify(payload)
    resp.status_code = status
    resp.headers.update(CORS_HEADERS)
    return resp


@app.errorhandler(413)
def request_entity_too_large(e):
    return _json({"error": "File too large. Please upload an image under 10MB."}, 413)


# ── API ──
@app.route("/generate-property-ad", methods=["POST", "OPTIONS"])
def generate_property_ad():
    if request.method == "OPTIONS":
        return Response(status=200, headers=CORS_HEADERS)

    try:
        body = request.get_json(force=True)
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        property_data = PropertyData.from_dict(body.get("propertyData"))

        api_key = _api_key()
        if not api_key:
            app.logger.error("LOVABLE_API_KEY not configured")
            return _json({"error": "AI service not configured"}, 500)

        app.logger.info(f"Generating ad for property: {property_data.to_dict()}")
        output = generate_ad(property_data, api_key)
        return _json({"output": output.to_dict()})
    except GenerationError as e:
        return _json({"error": e.message}, e.status_code)
    except RequestEntityTooLarge:
        raise
    except Exception as e:
        app.logger.error(f"Error in generate-property-ad: {e}")
        return _json({"error": str(e) or "Unknown error"}, 500)


# ── UI ──
@app.route("/", methods=["GET"])
def index():
    return render_template("index.html", form={}, output=None, cards=OUTPUT_CARDS)


@app.route("/", methods=["POST"])
def submit():
    form = {
        "price": request.form.get("price", ""),
        "size": request.form.get("size", ""),
        "location": request.form.get("location", ""),
        "sellingPoints": request.form.get("sellingPoints", ""),
    }
    image = request.files.get("image")
    image_bytes = image.read() if image and image.filename else b""
    previous_preview = request.form.get("image_preview", "")

    def render(output=None, preview=None, status=200):
        return (
            render_template(
                "index.html",
                form=form,
                output=output,
                preview=preview,
                cards=OUTPUT_CARDS,
            ),
            status,
        )

    # 새 업로드가 우선, 없으면 이전 제출의 preview 재사용
    preview = None
    try:
        if image_bytes:
            preview = make_preview(image_bytes)
        elif previous_preview:
            preview = check_preview(previous_preview)
    except ValueError as e:
        flash(str(e), "error")
        return render(status=400)

    missing = missing_fields(form, preview is not None)
    if missing:
        flash(f"Please provide: {', '.join(missing)}", "error")
        return render(preview=preview, status=400)

    api_key = _api_key()
    if not api_key:
        app.logger.error("LOVABLE_API_KEY not configured")
        flash("AI service not configured", "error")
        return render(preview=preview, status=500)

    try:
        output = generate_ad(PropertyData.from_dict(form), api_key)
    except GenerationError as e:
        flash(e.message, "error")
        return render(preview=preview, status=e.status_code)
    except Exception as e:
        app.logger.error(f"Error in submit: {e}")
        flash("Failed to generate content. Please try again.", "error")
        return render(preview=preview, status=500)

    flash("Ad content generated successfully", "success")
    return render(output=output.to_dict(), preview=preview)


if __name__ == "__main__":
    app.run(debug=True, port=5000)
