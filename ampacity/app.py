"""JSON API over the rating calculations.

Run with:

    python -m ampacity.app

"""
import logging
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from ampacity.exceptions import RatingError
from ampacity.params import (ConductorProperties, SolarGeometry, TransientSettings,
                             WeatherConditions)
from ampacity.rating import Conductor

logger = logging.getLogger(__name__)

app = Flask(__name__)


class RatingRequest(BaseModel):
    weather: WeatherConditions
    conductor: ConductorProperties
    geometry: Optional[SolarGeometry] = None

    def build(self):
        return Conductor(self.weather, self.conductor, self.geometry)


class ThermalRatingRequest(RatingRequest):
    conductor_temperature: float = Field(description="Max allowable conductor temperature in deg C")
    strict: bool = False


class TemperatureRequest(RatingRequest):
    current: float = Field(description="Conductor current in amps")
    tolerance: Optional[float] = Field(default=None, gt=0)


class TransientRequest(RatingRequest):
    transient: TransientSettings
    tolerance: Optional[float] = Field(default=None, gt=0)


def parse(model):
    return model.model_validate(request.get_json(silent=True) or {})


@app.errorhandler(ValidationError)
def invalid_request(e):
    return jsonify({"error": "Invalid input parameters", "detail": str(e)}), 400


@app.errorhandler(ValueError)
def invalid_value(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(RatingError)
def no_rating(e):
    logger.info("No rating: %s" % e)
    return jsonify({"error": str(e)}), 422


@app.route('/api/health')
def health():
    return jsonify({"status": "ok"})


@app.route('/api/thermal-rating', methods=['POST'])
def thermal_rating():
    req = parse(ThermalRatingRequest)
    con = req.build()
    rating_amps = con.steady_state_thermal_rating(req.conductor_temperature, strict=req.strict)
    balance = con.heat_balance(req.conductor_temperature)
    return jsonify({
        'rating_amps': rating_amps,
        'qc': balance.qc,
        'qr': balance.qr,
        'qs': balance.qs,
        'resistance': balance.resistance,
    })


@app.route('/api/calculated-temperature', methods=['POST'])
def calculated_temperature():
    req = parse(TemperatureRequest)
    temperature = req.build().calculated_temperature(req.current, req.tolerance)
    return jsonify({'temperature': temperature})


@app.route('/api/temperature-rise', methods=['POST'])
def temperature_rise():
    req = parse(TransientRequest)
    t = req.transient
    if t.current is None:
        return jsonify({"error": "transient.current required"}), 400

    con = req.build()
    result = con.temperature_trajectory(t.conductor_temperature, t.current, t.time_step, t.steps)
    rise = con.conductor_temperature_rise(t.conductor_temperature, t.current, t.time_step, t.steps)
    return jsonify({
        'rise': rise,
        'final_temperature': result.final_temperature,
        'trajectory': result.trajectory,
    })


@app.route('/api/transient-rating', methods=['POST'])
def transient_rating():
    req = parse(TransientRequest)
    t = req.transient
    if t.conductor_temperature_max is None:
        return jsonify({"error": "transient.conductor_temperature_max required"}), 400

    rating_amps = req.build().transient_rating(t.conductor_temperature,
                                               t.conductor_temperature_max,
                                               t.time_step, t.steps, req.tolerance)
    return jsonify({'rating_amps': rating_amps})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    app.run(debug=True)
