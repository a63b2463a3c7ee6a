"""
modules/tool_usage/seed_places.py
-----------------------------------
Bundled per-city place datasets, used when no Places API key is configured
or the live search returns nothing. Costs come from price_level like any
live result; ids are generated by PlaceAdapter.from_seed().
"""

from __future__ import annotations
from typing import Any


SEED_PLACES: dict[str, list[dict[str, Any]]] = {
    "barcelona": [
        {"name": "Café de l'Opera", "address": "La Rambla, 74, Barcelona", "rating": 4.2, "price_level": 2, "category": "cafe", "lat": 41.3809, "lng": 2.1734},
        {"name": "Café Central", "address": "Plaça Reial, 8, Barcelona", "rating": 4.1, "price_level": 2, "category": "cafe", "lat": 41.3809, "lng": 2.1734},
        {"name": "Café de la Pedrera", "address": "Passeig de Gràcia, 92, Barcelona", "rating": 4.3, "price_level": 3, "category": "cafe", "lat": 41.3954, "lng": 2.1619},
        {"name": "El Nacional", "address": "Passeig de Gràcia, 24, Barcelona", "rating": 4.4, "price_level": 3, "category": "restaurant", "lat": 41.3954, "lng": 2.1619},
        {"name": "Casa Lolea", "address": "Carrer de Sant Pere Més Alt, 49, Barcelona", "rating": 4.5, "price_level": 2, "category": "restaurant", "lat": 41.3851, "lng": 2.1734},
        {"name": "Tickets", "address": "Avinguda del Paral·lel, 164, Barcelona", "rating": 4.6, "price_level": 4, "category": "restaurant", "lat": 41.3751, "lng": 2.1634},
        {"name": "Sagrada Familia", "address": "Carrer de Mallorca, 401, Barcelona", "rating": 4.7, "price_level": 2, "category": "attraction", "lat": 41.4036, "lng": 2.1744},
        {"name": "Park Güell", "address": "Carrer d'Olot, Barcelona", "rating": 4.5, "price_level": 1, "category": "attraction", "lat": 41.4145, "lng": 2.1527},
        {"name": "Casa Batlló", "address": "Passeig de Gràcia, 43, Barcelona", "rating": 4.4, "price_level": 2, "category": "attraction", "lat": 41.3917, "lng": 2.1649},
        {"name": "Museu Picasso", "address": "Carrer de Montcada, 15-23, Barcelona", "rating": 4.3, "price_level": 2, "category": "museum", "lat": 41.3851, "lng": 2.1734},
        {"name": "Museu Nacional d'Art de Catalunya", "address": "Palau Nacional, Parc de Montjuïc, Barcelona", "rating": 4.4, "price_level": 2, "category": "museum", "lat": 41.3686, "lng": 2.1536},
        {"name": "Fundació Joan Miró", "address": "Parc de Montjuïc, Barcelona", "rating": 4.2, "price_level": 2, "category": "museum", "lat": 41.3686, "lng": 2.1536},
        {"name": "Parc de la Ciutadella", "address": "Passeig de Picasso, 21, Barcelona", "rating": 4.3, "price_level": 0, "category": "park", "lat": 41.3888, "lng": 2.187},
        {"name": "Parc del Laberint d'Horta", "address": "Passeig dels Castanyers, 1, Barcelona", "rating": 4.1, "price_level": 1, "category": "park", "lat": 41.4386, "lng": 2.1419},
        {"name": "Parc de Montjuïc", "address": "Montjuïc, Barcelona", "rating": 4.4, "price_level": 0, "category": "park", "lat": 41.3686, "lng": 2.1536},
        {"name": "El Bosc de les Fades", "address": "Passatge de la Banca, 5, Barcelona", "rating": 4.2, "price_level": 2, "category": "bar", "lat": 41.3809, "lng": 2.1734},
        {"name": "Dry Martini", "address": "Carrer d'Aribau, 162, Barcelona", "rating": 4.3, "price_level": 3, "category": "bar", "lat": 41.3954, "lng": 2.1619},
        {"name": "Bodega 1900", "address": "Carrer de Tamarit, 91, Barcelona", "rating": 4.4, "price_level": 3, "category": "bar", "lat": 41.3751, "lng": 2.1634},
    ],
    "paris": [
        {"name": "Café de Flore", "address": "172 Boulevard Saint-Germain, Paris", "rating": 4.2, "price_level": 3, "category": "cafe", "lat": 48.8542, "lng": 2.3319},
        {"name": "Les Deux Magots", "address": "6 Place Saint-Germain des Prés, Paris", "rating": 4.1, "price_level": 3, "category": "cafe", "lat": 48.8542, "lng": 2.3319},
        {"name": "Café de la Paix", "address": "5 Place de l'Opéra, Paris", "rating": 4.3, "price_level": 4, "category": "cafe", "lat": 48.872, "lng": 2.3319},
        {"name": "L'As du Fallafel", "address": "34 Rue des Rosiers, Paris", "rating": 4.4, "price_level": 2, "category": "restaurant", "lat": 48.8575, "lng": 2.3589},
        {"name": "Le Comptoir du Relais", "address": "9 Carrefour de l'Odéon, Paris", "rating": 4.5, "price_level": 3, "category": "restaurant", "lat": 48.8542, "lng": 2.3319},
        {"name": "L'Ami Jean", "address": "27 Rue Malar, Paris", "rating": 4.6, "price_level": 4, "category": "restaurant", "lat": 48.8606, "lng": 2.3376},
        {"name": "Eiffel Tower", "address": "Champ de Mars, 5 Avenue Anatole France, Paris", "rating": 4.7, "price_level": 2, "category": "attraction", "lat": 48.8584, "lng": 2.2945},
        {"name": "Louvre Museum", "address": "Rue de Rivoli, Paris", "rating": 4.6, "price_level": 2, "category": "attraction", "lat": 48.8606, "lng": 2.3376},
        {"name": "Notre-Dame Cathedral", "address": "6 Parvis Notre-Dame - Pl. Jean-Paul II, Paris", "rating": 4.5, "price_level": 0, "category": "attraction", "lat": 48.853, "lng": 2.3499},
        {"name": "Musée d'Orsay", "address": "1 Rue de la Légion d'Honneur, Paris", "rating": 4.4, "price_level": 2, "category": "museum", "lat": 48.86, "lng": 2.3266},
        {"name": "Centre Pompidou", "address": "Place Georges-Pompidou, Paris", "rating": 4.3, "price_level": 2, "category": "museum", "lat": 48.8606, "lng": 2.3522},
        {"name": "Musée Rodin", "address": "77 Rue de Varenne, Paris", "rating": 4.2, "price_level": 2, "category": "museum", "lat": 48.855, "lng": 2.3158},
        {"name": "Jardin du Luxembourg", "address": "Rue de Médicis - Rue de Vaugirard, Paris", "rating": 4.5, "price_level": 0, "category": "park", "lat": 48.8462, "lng": 2.3372},
        {"name": "Parc des Buttes-Chaumont", "address": "1 Rue Botzaris, Paris", "rating": 4.3, "price_level": 0, "category": "park", "lat": 48.88, "lng": 2.3833},
        {"name": "Jardin des Tuileries", "address": "Place de la Concorde, Paris", "rating": 4.4, "price_level": 0, "category": "park", "lat": 48.8634, "lng": 2.3275},
        {"name": "Le Comptoir Général", "address": "84 Quai de Jemmapes, Paris", "rating": 4.2, "price_level": 2, "category": "bar", "lat": 48.87, "lng": 2.3667},
        {"name": "Le Perchoir", "address": "14 Rue Crespin du Gast, Paris", "rating": 4.3, "price_level": 3, "category": "bar", "lat": 48.87, "lng": 2.3667},
        {"name": "Le Syndicat", "address": "51 Rue du Faubourg Saint-Denis, Paris", "rating": 4.4, "price_level": 3, "category": "bar", "lat": 48.87, "lng": 2.3667},
    ],
    "lisbon": [
        {"name": "Cervejaria Ramiro", "address": "Av. Almirante Reis, Lisbon", "rating": 4.6, "price_level": 3, "category": "restaurant"},
        {"name": "A Cevicheria", "address": "Rua Dom Pedro V, Lisbon", "rating": 4.4, "price_level": 3, "category": "restaurant"},
        {"name": "Taberna da Rua das Flores", "address": "Rua das Flores, Lisbon", "rating": 4.3, "price_level": 2, "category": "restaurant"},
        {"name": "A Brasileira", "address": "Rua Garrett, Lisbon", "rating": 4.1, "price_level": 2, "category": "cafe"},
        {"name": "Café Nicola", "address": "Praça Dom Pedro IV, Lisbon", "rating": 4, "price_level": 2, "category": "cafe"},
        {"name": "Fábrica Coffee Roasters", "address": "Rua das Portas de Santo Antão, Lisbon", "rating": 4.4, "price_level": 2, "category": "cafe"},
        {"name": "Museu Nacional de Arte Antiga", "address": "Rua das Janelas Verdes, Lisbon", "rating": 4.3, "price_level": 2, "category": "museum"},
        {"name": "Museu Calouste Gulbenkian", "address": "Av. de Berna, Lisbon", "rating": 4.5, "price_level": 2, "category": "museum"},
        {"name": "Museu do Azulejo", "address": "Rua da Madre de Deus, Lisbon", "rating": 4.2, "price_level": 2, "category": "museum"},
        {"name": "Jardim da Estrela", "address": "Praça da Estrela, Lisbon", "rating": 4.3, "price_level": 0, "category": "park"},
        {"name": "Parque Eduardo VII", "address": "Av. Sidónio Pais, Lisbon", "rating": 4.1, "price_level": 0, "category": "park"},
        {"name": "Miradouro de São Pedro de Alcântara", "address": "Rua de São Pedro de Alcântara, Lisbon", "rating": 4.4, "price_level": 0, "category": "park"},
        {"name": "Castelo de São Jorge", "address": "Rua de Santa Cruz do Castelo, Lisbon", "rating": 4.4, "price_level": 2, "category": "attraction"},
        {"name": "Torre de Belém", "address": "Av. Brasília, Lisbon", "rating": 4.5, "price_level": 2, "category": "attraction"},
        {"name": "Mosteiro dos Jerónimos", "address": "Praça do Império, Lisbon", "rating": 4.6, "price_level": 2, "category": "attraction"},
        {"name": "Pensão Amor", "address": "Rua do Alecrim, Lisbon", "rating": 4.3, "price_level": 2, "category": "bar"},
        {"name": "Pavilhão Chinês", "address": "Rua Dom Pedro V, Lisbon", "rating": 4.2, "price_level": 2, "category": "bar"},
        {"name": "Park Bar", "address": "Calçada do Combro, Lisbon", "rating": 4.4, "price_level": 2, "category": "bar"},
    ],
    "venice": [
        {"name": "Caffè Florian", "address": "Piazza San Marco, Venice", "rating": 4.2, "price_level": 3, "category": "cafe", "lat": 45.4342, "lng": 12.3388},
        {"name": "Caffè Quadri", "address": "Piazza San Marco, Venice", "rating": 4.1, "price_level": 3, "category": "cafe", "lat": 45.4342, "lng": 12.3388},
        {"name": "Torrefazione Marchi", "address": "Calle del Caffè, Venice", "rating": 4.3, "price_level": 2, "category": "cafe", "lat": 45.4408, "lng": 12.3155},
        {"name": "Osteria alle Testiere", "address": "Calle del Mondo Novo, Venice", "rating": 4.5, "price_level": 3, "category": "restaurant", "lat": 45.4408, "lng": 12.3155},
        {"name": "Trattoria da Fiore", "address": "Calle del Scaleter, Venice", "rating": 4.4, "price_level": 3, "category": "restaurant", "lat": 45.4408, "lng": 12.3155},
        {"name": "Ristorante Quadri", "address": "Piazza San Marco, Venice", "rating": 4.6, "price_level": 4, "category": "restaurant", "lat": 45.4342, "lng": 12.3388},
        {"name": "St. Mark's Basilica", "address": "Piazza San Marco, Venice", "rating": 4.7, "price_level": 0, "category": "attraction", "lat": 45.4342, "lng": 12.3388},
        {"name": "Rialto Bridge", "address": "Rialto Bridge, Venice", "rating": 4.5, "price_level": 0, "category": "attraction", "lat": 45.438, "lng": 12.3358},
        {"name": "Grand Canal", "address": "Grand Canal, Venice", "rating": 4.8, "price_level": 0, "category": "attraction", "lat": 45.4408, "lng": 12.3155},
        {"name": "Doge's Palace", "address": "Piazza San Marco, Venice", "rating": 4.6, "price_level": 2, "category": "museum", "lat": 45.4342, "lng": 12.3388},
        {"name": "Gallerie dell'Accademia", "address": "Campo della Carità, Venice", "rating": 4.4, "price_level": 2, "category": "museum", "lat": 45.4308, "lng": 12.3288},
        {"name": "Peggy Guggenheim Collection", "address": "Palazzo Venier dei Leoni, Venice", "rating": 4.3, "price_level": 2, "category": "museum", "lat": 45.4308, "lng": 12.3288},
        {"name": "Giardini della Biennale", "address": "Castello, Venice", "rating": 4.3, "price_level": 0, "category": "park", "lat": 45.4308, "lng": 12.3594},
        {"name": "Parco delle Rimembranze", "address": "Castello, Venice", "rating": 4.1, "price_level": 0, "category": "park", "lat": 45.4308, "lng": 12.3594},
        {"name": "Giardini Papadopoli", "address": "Santa Croce, Venice", "rating": 4.2, "price_level": 0, "category": "park", "lat": 45.4408, "lng": 12.3155},
        {"name": "Harry's Bar", "address": "Calle Vallaresso, Venice", "rating": 4.3, "price_level": 4, "category": "bar", "lat": 45.4342, "lng": 12.3388},
        {"name": "Caffè Centrale", "address": "Calle Larga San Marco, Venice", "rating": 4.1, "price_level": 2, "category": "bar", "lat": 45.4342, "lng": 12.3388},
        {"name": "Bacaro Jazz", "address": "Calle del Mondo Novo, Venice", "rating": 4.2, "price_level": 2, "category": "bar", "lat": 45.4408, "lng": 12.3155},
    ],
}


def city_key(city: str) -> str:
    return city.strip().lower().split(",")[0].strip()


def places_for_city(city: str) -> list[dict[str, Any]]:
    """Raw seed records for a city; unknown city → []."""
    return list(SEED_PLACES.get(city_key(city), []))
