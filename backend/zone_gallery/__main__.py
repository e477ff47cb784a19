from zone_gallery.main import run

run()
